"""Market data access layer for the CoinGecko API"""
from .market_data_client import MarketDataClient
from .priority_composer import PriorityComposer
from .fallback_synthesizer import FallbackSynthesizer
from .request_pacer import RequestPacer
from .retry_policy import RetryPolicy

__all__ = [
    'MarketDataClient',
    'PriorityComposer',
    'FallbackSynthesizer',
    'RequestPacer',
    'RetryPolicy',
]
