"""
Pytest configuration and fixtures for market data tests
"""

import asyncio
from typing import List

import pytest

from src.services.fallback_synthesizer import FallbackSynthesizer
from src.services.market_data_client import MarketDataClient
from src.services.request_pacer import RequestPacer
from src.services.retry_policy import RetryPolicy


# 2024-01-01T00:00:00Z
FIXED_NOW = 1704067200.0

TEST_BASE_URL = "https://api.test/api/v3"


class FakeClock:
    """
    Manually advanced clock with a sleep that moves time forward

    Lets pacing and backoff tests run instantly while still observing
    how long the code would have waited.
    """

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        # Give other tasks a chance to run, like a real sleep would
        await asyncio.sleep(0)


@pytest.fixture
def fake_clock():
    """Fake monotonic clock shared by pacer and retry policy"""
    return FakeClock()


@pytest.fixture
def synthesizer():
    """Synthesizer with a frozen wall clock"""
    return FallbackSynthesizer(priority_coin_id="vanry", clock=lambda: FIXED_NOW)


@pytest.fixture
def client(fake_clock, synthesizer):
    """
    Client wired to the fake clock

    Tests patch client._fetch to script upstream responses.
    """
    return MarketDataClient(
        pacer=RequestPacer(min_interval=1.5, clock=fake_clock, sleep=fake_clock.sleep),
        retry_policy=RetryPolicy(max_attempts=3, base_delay=1.0, sleep=fake_clock.sleep),
        synthesizer=synthesizer,
        base_url=TEST_BASE_URL,
        api_key="",
    )
