import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import pyperclip

from tinylink_cli.models import ErrorKind

logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    """Raised by clipboard backends when a write is rejected."""


# ========== Port ==========
class ClipboardPort(ABC):
    """Async clipboard writer that reports failure instead of raising."""

    async def write_text(self, text: str) -> Optional[ErrorKind]:
        """Copy ``text``; return None on success or CLIPBOARD_FAILURE."""
        try:
            await self._write(text)
        except Exception as e:
            logger.warning("Failed to copy: %s", e)
            return ErrorKind.CLIPBOARD_FAILURE
        return None

    @abstractmethod
    async def _write(self, text: str) -> None:
        ...


# ========== Adapters ==========
class SystemClipboard(ClipboardPort):
    """Platform clipboard via pyperclip, run off the event loop."""

    async def _write(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e
