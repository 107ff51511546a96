import asyncio
import logging
from typing import Optional

import httpx

from tinylink_cli.models import (
    ErrorKind, MESSAGES, ShortenFailure, ShortenRequest, ShortenResult, ShortenSuccess,
)
from tinylink_cli.utils import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

SHORTEN_PATH = "/api/shorten"


# ========== HTTP client ==========
class ShortenClient:
    """Talks to ``POST {base_url}/api/shorten``.

    Each ``submit`` makes exactly one attempt and always resolves to a
    ShortenResult; transport errors never escape.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, verify_tls: bool = True,
                 http: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            verify=verify_tls,
            follow_redirects=False,
        )

    @classmethod
    def from_config(cls, cfg) -> "ShortenClient":
        return cls(cfg.url, timeout=cfg.timeout, verify_tls=cfg.verify_tls)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{SHORTEN_PATH}"

    async def submit(self, url: str) -> ShortenResult:
        request = ShortenRequest(original_url=url)
        logger.debug("POST %s %s", self.endpoint, request.to_json())
        try:
            resp = await asyncio.wait_for(
                self._http.post(
                    self.endpoint,
                    json=request.to_json(),
                    headers={"Content-Type": "application/json"},
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Shorten request timed out after %ss: %r", self.timeout, e)
            return ShortenFailure(ErrorKind.TIMEOUT, MESSAGES[ErrorKind.TIMEOUT])
        except httpx.HTTPError as e:
            logger.warning("Shorten request failed: %r", e)
            return ShortenFailure(ErrorKind.UNKNOWN, MESSAGES[ErrorKind.UNKNOWN])

        logger.debug("Status: %s Response: %s", resp.status_code, resp.text)
        return self._classify(resp)

    def _classify(self, resp: httpx.Response) -> ShortenResult:
        status = resp.status_code
        body = _json_or_none(resp)

        if 200 <= status < 300:
            short_url = body.get("short_url") if isinstance(body, dict) else None
            if isinstance(short_url, str) and short_url:
                return ShortenSuccess(short_url=short_url)
            logger.warning("Success response without short_url: %s", resp.text)
        elif status == 400:
            error = body.get("error") if isinstance(body, dict) else None
            detail = error if isinstance(error, str) and error else MESSAGES[ErrorKind.CLIENT_REJECTED]
            return ShortenFailure(ErrorKind.CLIENT_REJECTED, detail, status_code=status)
        elif status == 500:
            return ShortenFailure(ErrorKind.SERVER_FAULT, MESSAGES[ErrorKind.SERVER_FAULT], status_code=status)

        return ShortenFailure(ErrorKind.UNKNOWN, MESSAGES[ErrorKind.UNKNOWN], status_code=status)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self) -> "ShortenClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def _json_or_none(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError:
        return None
