import asyncio
import logging
import dataclasses
from typing import Callable, List, Optional

from tinylink_cli.clipboard import ClipboardPort
from tinylink_cli.models import ErrorKind, SubmissionState, message_for
from tinylink_cli.validators import is_valid_url

logger = logging.getLogger(__name__)

COPIED_RESET_DELAY = 2.0
ENTER_KEYS = frozenset({"enter", "Enter", "c-m", "\r", "\n"})

Listener = Callable[[SubmissionState], None]


class SubmissionController:
    """Owns the SubmissionState and runs the submit and copy workflows.

    The view reads copies of the state through ``snapshot``/``subscribe`` and
    drives it only through the command methods. All methods must be called
    from the event loop thread.
    """

    def __init__(self, client, clipboard: ClipboardPort, copied_reset_delay: float = COPIED_RESET_DELAY):
        self.client = client
        self.clipboard = clipboard
        self.copied_reset_delay = copied_reset_delay
        self._state = SubmissionState()
        self._listeners: List[Listener] = []
        self._copied_timer: Optional[asyncio.TimerHandle] = None

    # ========== Observation ==========
    def snapshot(self) -> SubmissionState:
        return dataclasses.replace(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self):
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    @property
    def can_submit(self) -> bool:
        return not self._state.is_submitting and bool(self._state.long_url_input.strip())

    # ========== Commands ==========
    def on_input_changed(self, text: str):
        self._state.long_url_input = text
        self._state.error_message = None
        self._notify()

    async def submit(self):
        state = self._state
        if state.is_submitting:
            logger.debug("Submit ignored: request already in flight")
            return

        state.short_url = None
        state.error_message = None
        self._clear_copied()

        url = state.long_url_input
        if not url.strip():
            self._fail(ErrorKind.EMPTY_INPUT)
            return
        if not is_valid_url(url):
            self._fail(ErrorKind.MALFORMED_URL)
            return

        state.is_submitting = True
        self._notify()
        try:
            result = await self.client.submit(url)
            if result.ok:
                state.short_url = result.short_url
                state.long_url_input = ""
                logger.info("Shortened %s -> %s", url, result.short_url)
            else:
                state.error_message = result.message
        except Exception:
            logger.exception("Error shortening URL")
            state.error_message = message_for(ErrorKind.UNKNOWN)
        finally:
            state.is_submitting = False
            self._notify()

    async def submit_on_enter(self, key: str):
        if key in ENTER_KEYS and not self._state.is_submitting:
            await self.submit()

    async def copy(self):
        short_url = self._state.short_url
        if not short_url:
            return

        error = await self.clipboard.write_text(short_url)
        if self._state.short_url != short_url:
            logger.debug("Copy result dropped: state moved on")
            return

        if error is None:
            self._state.is_copied = True
            self._schedule_copied_reset()
        else:
            self._state.short_url = None
            self._state.is_copied = False
            self._state.error_message = message_for(error)
        self._notify()

    def close(self):
        self._cancel_copied_timer()

    # ========== Internal helpers ==========
    def _fail(self, kind: ErrorKind):
        self._state.error_message = message_for(kind)
        self._notify()

    def _schedule_copied_reset(self):
        self._cancel_copied_timer()
        loop = asyncio.get_running_loop()
        self._copied_timer = loop.call_later(self.copied_reset_delay, self._reset_copied)

    def _reset_copied(self):
        self._copied_timer = None
        if self._state.is_copied:
            self._state.is_copied = False
            self._notify()

    def _clear_copied(self):
        self._cancel_copied_timer()
        self._state.is_copied = False

    def _cancel_copied_timer(self):
        if self._copied_timer is not None:
            self._copied_timer.cancel()
            self._copied_timer = None
