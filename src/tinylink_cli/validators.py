import re
from urllib.parse import urlsplit

# Schemes that carry an authority component and make sense to shorten.
RECOGNIZED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BAD_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
_HOST_CHARS = re.compile(r"^[^\s/?#@\\<>\"{}|^`]+$")


def is_valid_url(candidate: str) -> bool:
    """Check whether ``candidate`` is a well-formed absolute URL.

    The string is taken as is: surrounding whitespace is not stripped and
    makes the candidate invalid. Never raises.
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    if _BAD_CHARS.search(candidate) or _BAD_PERCENT.search(candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # .port raises ValueError for non-numeric or out of range ports
        port = parts.port
    except ValueError:
        return False

    if parts.scheme.lower() not in RECOGNIZED_SCHEMES:
        return False
    if not candidate[len(parts.scheme) + 1:].startswith("//"):
        return False

    host = parts.hostname
    if not host or not _HOST_CHARS.match(host):
        return False
    return port is None or 0 <= port <= 65535
