"""
Core module - shared types and enums for the market data layer.
"""

from src.core.enums import (
    ErrorKind,
    MarketOrder,
    HistoryDays,
)

__all__ = [
    "ErrorKind",
    "MarketOrder",
    "HistoryDays",
]
