# coding: utf-8
"""
Request pacing for the CoinGecko free tier

All outbound calls go through one shared RequestPacer so that requests are
spaced at least `min_interval` seconds apart, no matter how many coroutines
ask for data at the same time.
"""
import time
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger


@dataclass
class PacerStatus:
    """Snapshot of the pacing state"""
    last_request_time: Optional[float]
    time_until_next_request: float
    is_rate_limited: bool
    min_interval: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "last_request_time": self.last_request_time,
            "time_until_next_request": round(self.time_until_next_request, 3),
            "is_rate_limited": self.is_rate_limited,
            "min_interval": self.min_interval,
        }


class RequestPacer:
    """
    Enforces a minimum spacing between outbound requests

    The read-compute-sleep-write sequence runs under an asyncio.Lock, so
    concurrent callers are granted one after another in arrival order.
    """

    def __init__(
        self,
        min_interval: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize request pacer

        Args:
            min_interval: Minimum seconds between two granted requests (default: 1.5s)
            clock: Monotonic time source in seconds
            sleep: Coroutine used to wait
        """
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")

        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_granted: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """
        Wait until it is safe to issue the next request
        """
        async with self._lock:
            if self._last_granted is not None:
                elapsed = self._clock() - self._last_granted
                if elapsed < self.min_interval:
                    wait_time = self.min_interval - elapsed
                    logger.debug(f"Pacing request, waiting {wait_time:.3f}s")
                    await self._sleep(wait_time)

            self._last_granted = self._clock()

    def get_status(self) -> PacerStatus:
        """Get current pacing status"""
        if self._last_granted is None:
            remaining = 0.0
        else:
            remaining = max(0.0, self.min_interval - (self._clock() - self._last_granted))

        return PacerStatus(
            last_request_time=self._last_granted,
            time_until_next_request=remaining,
            is_rate_limited=remaining > 0,
            min_interval=self.min_interval,
        )
