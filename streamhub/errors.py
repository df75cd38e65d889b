"""
Error taxonomy for sources and extractors.

Sources and extractors raise whatever their HTTP stack raises; the typed
errors below let them be more specific. ``classify_error`` maps any
exception onto an ``ErrorType`` and ``nice_error_message`` turns it into
the one-line text shown to users when error reporting is enabled.
"""

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

import httpx

if TYPE_CHECKING:
    from streamhub.resolving.base import Context

logger = logging.getLogger(__name__)


class StreamhubError(Exception):
    """Base class for errors raised by sources and extractors."""


class NotFoundError(StreamhubError):
    """The requested title does not exist on the remote site."""


class BlockedError(StreamhubError):
    """The remote site refused to serve us (captcha, cloudflare, geo block)."""

    def __init__(self, message: str = "Request was blocked", reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class TooManyRequestsError(StreamhubError):
    """The remote site rate limited us."""

    def __init__(self, message: str = "Too many requests", retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class SourceTimeoutError(StreamhubError):
    """A source did not answer within its deadline."""


class ExtractorTimeoutError(StreamhubError):
    """An extractor did not finish within its deadline."""


class HttpStatusError(StreamhubError):
    """The remote site answered with an unexpected HTTP status."""

    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP {status_code} for {url}" if url else f"HTTP {status_code}")
        self.status_code = status_code
        self.url = url


class ErrorType(str, Enum):
    """Classification of source/extractor failures."""

    NOT_FOUND = "not_found"
    BLOCKED = "blocked"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    HTTP = "http"
    NETWORK = "network"
    UNKNOWN = "unknown"


# Expected outcomes are logged quietly
_EXPECTED = {ErrorType.NOT_FOUND, ErrorType.BLOCKED, ErrorType.RATE_LIMIT}


def _status_code(error: BaseException) -> Optional[int]:
    if isinstance(error, HttpStatusError):
        return error.status_code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def classify_error(error: BaseException) -> ErrorType:
    """
    Classify an exception into an ErrorType.

    Typed errors win, then HTTP status codes, then transport errors, then
    keywords in the message.
    """
    if isinstance(error, NotFoundError):
        return ErrorType.NOT_FOUND
    if isinstance(error, BlockedError):
        return ErrorType.BLOCKED
    if isinstance(error, TooManyRequestsError):
        return ErrorType.RATE_LIMIT
    timeouts = (SourceTimeoutError, ExtractorTimeoutError, TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)
    if isinstance(error, timeouts):
        return ErrorType.TIMEOUT

    status = _status_code(error)
    if status is not None:
        if status == 404:
            return ErrorType.NOT_FOUND
        if status == 429:
            return ErrorType.RATE_LIMIT
        if status == 403:
            return ErrorType.BLOCKED
        return ErrorType.HTTP

    if isinstance(error, httpx.RequestError):
        return ErrorType.NETWORK

    error_str = str(error).lower()
    if "not found" in error_str or "404" in error_str:
        return ErrorType.NOT_FOUND
    if any(term in error_str for term in ["rate limit", "too many requests", "429"]):
        return ErrorType.RATE_LIMIT
    if any(term in error_str for term in ["captcha", "cloudflare", "forbidden", "blocked", "403"]):
        return ErrorType.BLOCKED
    if "timeout" in error_str or "timed out" in error_str:
        return ErrorType.TIMEOUT
    if any(term in error_str for term in ["connection", "network", "dns", "resolve hostname"]):
        return ErrorType.NETWORK

    return ErrorType.UNKNOWN


def _message_for(error_type: ErrorType, error: BaseException) -> str:
    if error_type == ErrorType.NOT_FOUND:
        return "🚫 Not found."
    if error_type == ErrorType.BLOCKED:
        reason = getattr(error, "reason", None)
        return f"⚠️ Request was blocked ({reason})." if reason else "⚠️ Request was blocked."
    if error_type == ErrorType.RATE_LIMIT:
        return "🚦 Too many requests. Try again later."
    if error_type == ErrorType.TIMEOUT:
        return "⏱️ Request timed out."
    if error_type == ErrorType.HTTP:
        return f"❌ Remote server answered with HTTP {_status_code(error)}."
    if error_type == ErrorType.NETWORK:
        return "🌐 Network error."
    return "❌ Request failed. Please try again later."


def nice_error_message(ctx: "Context", source_id: str, error: BaseException) -> str:
    """
    Log a source/extractor failure and return its user-facing line.

    Args:
        ctx: Request context, used for the request id in the log line
        source_id: Id of the source the failure is attributed to
        error: The underlying exception

    Returns:
        Single line describing the failure for display in a stream title
    """
    error_type = classify_error(error)

    if error_type in _EXPECTED:
        logger.info(f"[{ctx.id}] {source_id}: {error_type.value}: {error}")
    else:
        logger.warning(
            f"[{ctx.id}] {source_id}: {error_type.value}: {type(error).__name__}: {error}",
            exc_info=error if error_type == ErrorType.UNKNOWN else None,
        )

    return _message_for(error_type, error)
