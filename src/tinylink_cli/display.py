from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from tinylink_cli.models import SubmissionState

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
    "link": "bold blue underline",
})
console = Console(theme=custom_theme)


def info_panel(title: str, msg: str, style: str = "cyan"):
    console.print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def error_panel(title: str, msg: str):
    info_panel(title, msg, style="red")


def result_panel(original_url: str, short_url: str):
    body = Text()
    body.append("Original URL:\n", style="bold")
    body.append(f"{original_url}\n\n")
    body.append(short_url, style="link")
    console.print(Panel.fit(body, title="Shortened", border_style="green"))


# ========== State rendering ==========
def render_transition(prev: SubmissionState, cur: SubmissionState, original_url: str = ""):
    """Print what changed between two snapshots that the user should see.

    Keystroke-only changes print nothing.
    """
    if cur.short_url and cur.short_url != prev.short_url:
        result_panel(original_url, cur.short_url)
    if cur.error_message and cur.error_message != prev.error_message:
        error_panel("Error", cur.error_message)
    if cur.is_copied and not prev.is_copied:
        console.print("[ok]✓ Copied[/ok]")


def toolbar_text(state: SubmissionState) -> str:
    if state.is_copied:
        return " ✓ Copied"
    if state.short_url:
        return f" {state.short_url}  (Ctrl+Y to copy)"
    return " Enter: shorten  Ctrl+C: clear  Ctrl+D: exit"
