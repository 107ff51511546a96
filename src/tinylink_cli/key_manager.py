from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style


# ========== Key bindings ==========
class KeyBindingManager:
    """Enter submits, Ctrl+Y copies, Ctrl+C clears the line."""

    SUBMIT_KEYS = ("enter",)
    COPY_KEYS = ("c-y",)

    def __init__(self, accept_callback: Callable[[], None], clear_callback: Callable[[], None],
                 copy_callback: Optional[Callable[[], None]] = None):
        self.bindings = KeyBindings()
        self.submit_labels: List[str] = []

        for key in self.SUBMIT_KEYS:
            self.bindings.add(key)(lambda event: accept_callback())
            self.submit_labels.append(_label(key))

        self.bindings.add("c-c")(lambda event: clear_callback())

        if copy_callback is not None:
            for key in self.COPY_KEYS:
                self.bindings.add(key)(lambda event: copy_callback())


def _label(key: str) -> str:
    if key.startswith("c-"):
        return f"Ctrl+{key[2:].upper()}"
    return key.capitalize()


# ========== Prompt session ==========
class SessionFactory:
    style = Style.from_dict({
        "counter": "ansicyan bold",
        "arrow": "ansiblue",
        "bottom-toolbar": "noreverse ansigray",
    })

    @staticmethod
    def build_session(bindings: KeyBindings, bottom_toolbar=None) -> PromptSession:
        return PromptSession(
            key_bindings=bindings,
            history=InMemoryHistory(),
            bottom_toolbar=bottom_toolbar,
            style=SessionFactory.style,
            multiline=False,
        )

    @staticmethod
    def make_prompt_fragments(counter: int) -> FormattedText:
        return FormattedText([
            ("class:counter", f"[{counter}]"),
            ("class:arrow", " URL> "),
        ])
