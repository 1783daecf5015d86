import logging
import time
from urllib.parse import urlparse

import aiohttp

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Exact text some HTTP stacks use for a response cut off mid-message
INCOMPLETE_MESSAGE = "parsed HTTP message from remote is incomplete"

# ────────────────────────────────
# Time Helpers
# ────────────────────────────────


def now() -> float:
    return time.perf_counter()


def wall_clock() -> float:
    return time.time()


def millis(seconds: float) -> int:
    """Whole milliseconds in a duration; negative durations (clock skew) count as 0."""
    if seconds <= 0:
        return 0
    return int(seconds * 1000)


# ────────────────────────────────
# URL Construction
# ────────────────────────────────


def build_url(base_url: str, target: str) -> str:
    url = f"{base_url}{target}"
    if any(ch.isspace() for ch in url):
        raise ConfigError(f"invalid URL: {url}")
    try:
        parsed = urlparse(url)
        # .port raises on out-of-range or non-numeric ports
        parsed.port
    except ValueError as e:
        raise ConfigError(f"invalid URL: {url}") from e
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ConfigError(f"invalid URL: {url}")
    return url


# ────────────────────────────────
# Error Classification
# ────────────────────────────────


# aiohttp prefix for a body cut short (content-length or chunked framing)
TRUNCATED_PAYLOAD_PREFIX = "Response payload is not completed"


def is_incomplete(error: BaseException) -> bool:
    """True when the remote closed mid-response, as opposed to never answering."""
    if isinstance(error, aiohttp.ServerDisconnectedError):
        # a partially parsed head arrives as RawResponseMessage, a bare close as a str
        return not isinstance(error.message, str)
    if isinstance(error, aiohttp.ClientPayloadError):
        return str(error).startswith(TRUNCATED_PAYLOAD_PREFIX)
    return str(error) == INCOMPLETE_MESSAGE
