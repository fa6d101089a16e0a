# coding: utf-8
"""
Error taxonomy for the market data access layer

Every failure that leaves the HTTP layer is converted into one of the
MarketDataError subclasses below, so callers never see raw aiohttp/asyncio
exceptions. to_user_message() renders any of them into a fixed string that
is safe to show in the dashboard.
"""
import asyncio
import json
import math
from typing import Mapping, Optional, Union

import aiohttp

from src.core.enums import ErrorKind


USER_MESSAGES = {
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please wait a moment before trying again.",
    ErrorKind.NOT_FOUND: "Coin not found. Please check the coin ID.",
    ErrorKind.TIMED_OUT: "Request timed out. Please try again.",
    ErrorKind.NETWORK_ERROR: "Network error. Please check your connection.",
    ErrorKind.SERVER_ERROR: (
        "Market data service is temporarily unavailable. Please try again later."
    ),
    ErrorKind.CLIENT_ERROR: (
        "The market data request was rejected. Please check the request parameters."
    ),
}

DEFAULT_USER_MESSAGE = "An unexpected error occurred."


class MarketDataError(Exception):
    """Base class for classified upstream failures"""

    kind: ErrorKind = ErrorKind.CLIENT_ERROR
    # Status used when the error is surfaced through our own HTTP API
    api_status: int = 400

    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message or self.kind.value)
        self.status = status

    @property
    def user_message(self) -> str:
        return to_user_message(self.kind)


class RateLimitedError(MarketDataError):
    """HTTP 429 from upstream"""

    kind = ErrorKind.RATE_LIMITED
    api_status = 429

    def __init__(
        self,
        message: str = "",
        status: Optional[int] = 429,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, status)
        self.retry_after = retry_after


class ServerError(MarketDataError):
    """HTTP 5xx from upstream"""

    kind = ErrorKind.SERVER_ERROR
    api_status = 503


class NotFoundError(MarketDataError):
    """HTTP 404 from upstream, or a coin unknown to the synthetic catalog"""

    kind = ErrorKind.NOT_FOUND
    api_status = 404


class ClientError(MarketDataError):
    """Any other 4xx from upstream"""

    kind = ErrorKind.CLIENT_ERROR
    api_status = 400


class NetworkError(MarketDataError):
    """No response received (DNS failure, refused connection, reset, ...)"""

    kind = ErrorKind.NETWORK_ERROR
    api_status = 503


class TimedOutError(MarketDataError):
    """Request exceeded the configured timeout"""

    kind = ErrorKind.TIMED_OUT
    api_status = 504


class InvalidRequestError(ValueError):
    """Malformed input from the caller (never retried, never absorbed by fallback)"""


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Parse a Retry-After header given in seconds

    Missing or unparseable values return None so the caller falls back
    to exponential backoff instead of failing.
    """
    if value is None:
        return None
    try:
        seconds = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def error_for_status(
    status: int,
    headers: Optional[Mapping[str, str]] = None,
    detail: str = "",
) -> MarketDataError:
    """
    Build the classified error for a non-success HTTP status

    Args:
        status: HTTP status code
        headers: Response headers (used for Retry-After on 429)
        detail: Short description for logs

    Returns:
        MarketDataError subclass instance
    """
    message = f"HTTP {status}" + (f": {detail}" if detail else "")

    if status == 429:
        retry_after = parse_retry_after((headers or {}).get("Retry-After"))
        return RateLimitedError(message, status=status, retry_after=retry_after)
    if status == 404:
        return NotFoundError(message, status=status)
    if status >= 500:
        return ServerError(message, status=status)
    return ClientError(message, status=status)


def classify_error(error: BaseException) -> Optional[MarketDataError]:
    """
    Map a transport failure into the error taxonomy

    Args:
        error: Exception raised while talking to upstream

    Returns:
        Classified MarketDataError, or None if the exception is not a
        transport failure (programming errors are not classified)
    """
    if isinstance(error, MarketDataError):
        return error

    # 200 with a truncated or non-JSON body
    if isinstance(error, json.JSONDecodeError):
        return ClientError(f"Malformed response body: {error}")

    if isinstance(error, aiohttp.ClientResponseError):
        return error_for_status(error.status, error.headers, error.message)

    # Must be checked before ClientError: ServerTimeoutError is both
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return TimedOutError(f"Request timed out: {error}")

    if isinstance(error, (aiohttp.ClientError, ConnectionError)):
        return NetworkError(f"Network error: {error}")

    return None


def to_user_message(error: Union[ErrorKind, BaseException, None]) -> str:
    """
    Render an error classification as a stable, user-presentable string

    Args:
        error: ErrorKind, MarketDataError or any exception

    Returns:
        Fixed message for the classification
    """
    if isinstance(error, ErrorKind):
        return USER_MESSAGES.get(error, DEFAULT_USER_MESSAGE)

    if isinstance(error, BaseException):
        classified = classify_error(error)
        if classified is not None:
            return USER_MESSAGES.get(classified.kind, DEFAULT_USER_MESSAGE)

    return DEFAULT_USER_MESSAGE
