#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import signal
import asyncio
import click
from typing import Optional

from prompt_toolkit.application.current import get_app, get_app_or_none
from prompt_toolkit.patch_stdout import patch_stdout

from rich.panel import Panel
from rich.text import Text

from tinylink_cli.client import ShortenClient
from tinylink_cli.clipboard import ClipboardPort, SystemClipboard
from tinylink_cli.controller import SubmissionController
from tinylink_cli.display import console, error_panel, render_transition, result_panel, toolbar_text
from tinylink_cli.key_manager import KeyBindingManager, SessionFactory
from tinylink_cli.logging_config import setup_logging
from tinylink_cli.models import SubmissionState
from tinylink_cli.utils import Config


# ========== Application Orchestrator ==========
class App:
    def __init__(self, cfg: Config, client: Optional[ShortenClient] = None,
                 clipboard: Optional[ClipboardPort] = None):
        self.cfg = cfg
        self.client = client or ShortenClient.from_config(cfg)
        self.controller = SubmissionController(self.client, clipboard or SystemClipboard())

        self._last_state: SubmissionState = self.controller.snapshot()
        self._submitted_url = ""
        self.controller.subscribe(self._on_state)

        def accept():
            app = get_app()
            buf = app.current_buffer
            buf.append_to_history()
            app.exit(result=buf.text)

        def clear():
            get_app().exit(exception=KeyboardInterrupt, style="class:aborting")

        def copy():
            get_app().create_background_task(self.controller.copy())

        self.kbm = KeyBindingManager(accept_callback=accept, clear_callback=clear, copy_callback=copy)
        self.session = SessionFactory.build_session(
            self.kbm.bindings,
            bottom_toolbar=lambda: toolbar_text(self.controller.snapshot()),
        )
        self.counter = 1

    def run(self):
        asyncio.run(self.run_async())

    async def run_async(self):
        self._print_banner()

        try:
            with patch_stdout(raw=True):
                while True:
                    try:
                        text = await self.session.prompt_async(SessionFactory.make_prompt_fragments(self.counter))
                        await self._handle_submit(text)
                        self.counter += 1
                    except KeyboardInterrupt:
                        console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                        continue
                    except EOFError:
                        console.print("\n[info]Exited.（Ctrl+D）[/info]")
                        break
        finally:
            self.controller.close()
            await self.client.aclose()

    # ========== Internal helpers ==========
    async def _handle_submit(self, text: str):
        self._submitted_url = text
        self.controller.on_input_changed(text)
        if self.controller.can_submit:
            console.print(f"[info]Shorten via ->[/info] {self.client.endpoint}")
        with console.status("Processing..."):
            await self.controller.submit_on_enter("enter")

    def _on_state(self, state: SubmissionState):
        render_transition(self._last_state, state, self._submitted_url)
        self._last_state = state
        app = get_app_or_none()
        if app is not None:
            app.invalidate()

    def _print_banner(self):
        submit_hint = "、".join(self.kbm.submit_labels) or "Enter"
        console.rule("[info]TinyLink[/info]")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        f" - Shorten：{submit_hint}\n"
                        " - Copy short URL：Ctrl+Y\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D\n\n"
                        "Paste a long URL (e.g., https://example.com) and press Enter.",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        console.print(f"[info]Your shortener api：[/info]{self.cfg.url}")
        if not self.cfg.verify_tls:
            console.print("[warn] Disable tls verification !（--insecure）[/warn]")


async def shorten_once(cfg: Config, url: str, copy: bool = False,
                       client: Optional[ShortenClient] = None,
                       clipboard: Optional[ClipboardPort] = None) -> int:
    """Run a single submission (and optional copy); return the exit status."""
    client = client or ShortenClient.from_config(cfg)
    controller = SubmissionController(client, clipboard or SystemClipboard())
    try:
        controller.on_input_changed(url)
        with console.status("Processing..."):
            await controller.submit()

        state = controller.snapshot()
        if state.error_message:
            error_panel("Error", state.error_message)
            return 1
        result_panel(url, state.short_url)

        if copy:
            await controller.copy()
            state = controller.snapshot()
            if state.error_message:
                error_panel("Error", state.error_message)
                return 1
            console.print("[ok]✓ Copied[/ok]")
        return 0
    finally:
        controller.close()
        await client.aclose()


# ========== CLI with Click ==========

@click.group()
@click.option("--url", help="Shortener api base url, overrides $TINYLINK_API_URL and ~/.tinylink.toml")
@click.option("--timeout", type=float, default=10, show_default=True, help="Request timeout in seconds.")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, url, timeout, insecure, debug):
    """
    tinylink: Fast & simple URL shortener for cli!
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    # Simulate argparse.Namespace for Config.init_from_args
    class Args:
        pass
    args = Args()
    args.url = url
    args.timeout = timeout
    args.insecure = insecure
    args.debug = debug
    cfg = Config.init_from_args(args)
    setup_logging("DEBUG" if cfg.debug else "WARNING")
    ctx.ensure_object(dict)["cfg"] = cfg


@cli.command("run")
@click.pass_context
def run_cmd(ctx):
    """Start the interactive TinyLink session."""
    cfg = ctx.obj["cfg"]
    app = App(cfg, client=_make_client(ctx), clipboard=ctx.obj.get("clipboard"))
    app.run()


@cli.command("shorten")
@click.argument("url")
@click.option("--copy", "copy_", is_flag=True, help="Copy the short url to clipboard.")
@click.pass_context
def shorten_cmd(ctx, url, copy_):
    """Shorten URL once and print the result."""
    cfg = ctx.obj["cfg"]
    code = asyncio.run(shorten_once(cfg, url, copy=copy_,
                                    client=_make_client(ctx),
                                    clipboard=ctx.obj.get("clipboard")))
    ctx.exit(code)


def _make_client(ctx) -> Optional[ShortenClient]:
    factory = ctx.obj.get("client_factory")
    return factory(ctx.obj["cfg"]) if factory else None


def main():
    cli(prog_name="tinylink")


if __name__ == "__main__":
    main()
