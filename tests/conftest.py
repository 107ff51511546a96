"""Pytest configuration and fixtures."""

import asyncio
from typing import Callable, List, Optional

import httpx
import pytest

from tinylink_cli.client import ShortenClient
from tinylink_cli.clipboard import ClipboardError, ClipboardPort
from tinylink_cli.controller import SubmissionController
from tinylink_cli.models import ShortenResult, ShortenSuccess

BASE_URL = "http://shortener.test"


class FakeClipboard(ClipboardPort):
    """Records writes; fails every write when ``fail`` is set."""

    def __init__(self, fail: bool = False, on_write: Optional[Callable[[str], None]] = None):
        self.fail = fail
        self.on_write = on_write
        self.writes: List[str] = []

    async def _write(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("permission denied")
        self.writes.append(text)
        if self.on_write is not None:
            self.on_write(text)


class FakeClient:
    """Stands in for ShortenClient at the controller seam.

    When ``gate`` is given, every submit blocks until it is set. ``on_submit``
    runs as each request goes out.
    """

    endpoint = f"{BASE_URL}/api/shorten"

    def __init__(self, result: Optional[ShortenResult] = None, gate: Optional[asyncio.Event] = None,
                 error: Optional[Exception] = None, on_submit: Optional[Callable[[str], None]] = None):
        self.result = result or ShortenSuccess("https://tiny.ly/abc123")
        self.gate = gate
        self.error = error
        self.on_submit = on_submit
        self.calls: List[str] = []

    async def submit(self, url: str) -> ShortenResult:
        self.calls.append(url)
        if self.on_submit is not None:
            self.on_submit(url)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def aclose(self):
        pass


def make_client(handler, timeout: float = 10.0) -> ShortenClient:
    """ShortenClient whose HTTP traffic goes to ``handler``."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ShortenClient(BASE_URL, timeout=timeout, http=http)


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def controller(fake_client, clipboard):
    ctl = SubmissionController(fake_client, clipboard)
    yield ctl
    ctl.close()


@pytest.fixture
def sample_urls():
    return [
        "https://example.com/page",
        "http://github.com/user/repo?tab=readme#top",
        "https://stackoverflow.com/questions/123456",
    ]
