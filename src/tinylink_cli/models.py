from enum import Enum
from typing import Optional, Union
from dataclasses import dataclass


# ========== Error taxonomy ==========
class ErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    MALFORMED_URL = "malformed_url"
    CLIENT_REJECTED = "client_rejected"
    SERVER_FAULT = "server_fault"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"
    CLIPBOARD_FAILURE = "clipboard_failure"


MESSAGES = {
    ErrorKind.EMPTY_INPUT: "Please enter a URL.",
    ErrorKind.MALFORMED_URL: "Please enter a valid URL (e.g., https://example.com).",
    ErrorKind.CLIENT_REJECTED: "Invalid URL format.",
    ErrorKind.SERVER_FAULT: "Server error. Please try again later.",
    ErrorKind.TIMEOUT: "Request timeout. Please try again.",
    ErrorKind.UNKNOWN: "An error occurred. Please try again.",
    ErrorKind.CLIPBOARD_FAILURE: "Failed to copy to clipboard.",
}


def message_for(kind: ErrorKind, detail: Optional[str] = None) -> str:
    """User-facing text for an error kind.

    Only a rejection by the server carries its own wording; every other kind
    has a fixed message.
    """
    if kind is ErrorKind.CLIENT_REJECTED and detail:
        return detail
    return MESSAGES[kind]


# ========== Wire models ==========
@dataclass(frozen=True)
class ShortenRequest:
    original_url: str

    def to_json(self) -> dict:
        return {"original_url": self.original_url}


@dataclass(frozen=True)
class ShortenSuccess:
    short_url: str
    ok: bool = True


@dataclass(frozen=True)
class ShortenFailure:
    kind: ErrorKind
    detail: Optional[str] = None
    status_code: Optional[int] = None
    ok: bool = False

    @property
    def message(self) -> str:
        return message_for(self.kind, self.detail)


ShortenResult = Union[ShortenSuccess, ShortenFailure]


# ========== UI state ==========
@dataclass
class SubmissionState:
    long_url_input: str = ""
    short_url: Optional[str] = None
    error_message: Optional[str] = None
    is_submitting: bool = False
    is_copied: bool = False

    @property
    def phase(self) -> str:
        """Derived state name: idle, submitting, success or error."""
        if self.is_submitting:
            return "submitting"
        if self.short_url:
            return "success"
        if self.error_message:
            return "error"
        return "idle"
