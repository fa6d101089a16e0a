"""
Core Enums - shared types for the market data access layer.

Defines:
- ErrorKind: classification of upstream failures
- MarketOrder: sort orders accepted by the markets endpoint
- HistoryDays: horizons accepted by the market chart endpoint
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed upstream request.

    Drives both retry decisions and the message shown to the user.
    """

    RATE_LIMITED = "rate_limited"  # HTTP 429
    SERVER_ERROR = "server_error"  # HTTP 5xx
    NOT_FOUND = "not_found"  # HTTP 404
    CLIENT_ERROR = "client_error"  # other 4xx
    NETWORK_ERROR = "network_error"  # no response (DNS, connection refused, ...)
    TIMED_OUT = "timed_out"  # request exceeded the configured timeout

    @classmethod
    def is_retryable(cls, kind: "ErrorKind") -> bool:
        """Transient failures worth retrying with backoff."""
        return kind in (cls.RATE_LIMITED, cls.SERVER_ERROR)


class MarketOrder(str, Enum):
    """Sort orders for /coins/markets."""

    MARKET_CAP_DESC = "market_cap_desc"
    MARKET_CAP_ASC = "market_cap_asc"
    VOLUME_DESC = "volume_desc"
    VOLUME_ASC = "volume_asc"
    ID_ASC = "id_asc"
    ID_DESC = "id_desc"


class HistoryDays(str, Enum):
    """Supported history horizons for /coins/{id}/market_chart."""

    ONE_DAY = "1"
    ONE_WEEK = "7"
    TWO_WEEKS = "14"
    ONE_MONTH = "30"
    THREE_MONTHS = "90"
    SIX_MONTHS = "180"
    ONE_YEAR = "365"
    MAX = "max"

    @property
    def day_count(self) -> int:
        """Number of daily points to synthesize ("max" is capped at one year)."""
        if self is HistoryDays.MAX:
            return 365
        return int(self.value)
