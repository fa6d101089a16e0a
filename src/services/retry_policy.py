# coding: utf-8
"""
Retry policy for upstream requests

Retries rate-limited (429) and server (5xx) failures with exponential
backoff, honouring Retry-After when upstream sends one. Everything else is
re-raised on the first failure.
"""
import asyncio
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)

from src.core.enums import ErrorKind
from src.services.errors import MarketDataError, RateLimitedError, classify_error

T = TypeVar("T")


@dataclass
class RetryAttempt:
    """One retry of a logical request"""
    attempt: int  # 0-based index of the failed attempt
    delay: float  # seconds waited before the next attempt
    kind: ErrorKind


def _is_retryable(error: BaseException) -> bool:
    classified = classify_error(error)
    return classified is not None and ErrorKind.is_retryable(classified.kind)


class RetryPolicy:
    """
    Bounded retries with exponential backoff

    Total attempts never exceed max_attempts + 1.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize retry policy

        Args:
            max_attempts: Retries after the first attempt (default: 3)
            base_delay: Backoff base in seconds: base, 2*base, 4*base, ...
            sleep: Coroutine used to wait between attempts
        """
        if max_attempts < 0:
            raise ValueError("max_attempts must be non-negative")
        if base_delay <= 0:
            raise ValueError("base_delay must be positive")

        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    def compute_delay(
        self,
        attempt: int,
        error: MarketDataError,
        base_delay: Optional[float] = None,
    ) -> float:
        """
        Delay before retrying after the given failed attempt

        Args:
            attempt: 0-based index of the failed attempt
            error: Classified failure
            base_delay: Override for the backoff base

        Returns:
            Seconds to wait
        """
        base = self.base_delay if base_delay is None else base_delay

        if isinstance(error, RateLimitedError) and error.retry_after is not None \
                and math.isfinite(error.retry_after) and error.retry_after >= 0:
            return error.retry_after

        return base * (2 ** attempt)

    async def execute(
        self,
        request: Callable[[], Awaitable[T]],
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
    ) -> T:
        """
        Run request with retries

        Args:
            request: Zero-argument coroutine factory, called once per attempt
            max_attempts: Override for the number of retries
            base_delay: Override for the backoff base

        Returns:
            Result of the first successful attempt

        Raises:
            MarketDataError: Classified last failure
        """
        retries = self.max_attempts if max_attempts is None else max_attempts
        attempts: List[RetryAttempt] = []

        def wait(retry_state: RetryCallState) -> float:
            error = classify_error(retry_state.outcome.exception())
            return self.compute_delay(retry_state.attempt_number - 1, error, base_delay)

        def before_sleep(retry_state: RetryCallState) -> None:
            error = classify_error(retry_state.outcome.exception())
            record = RetryAttempt(
                attempt=retry_state.attempt_number - 1,
                delay=retry_state.next_action.sleep,
                kind=error.kind,
            )
            attempts.append(record)
            logger.warning(
                f"{error.kind.value} on attempt {record.attempt + 1}/{retries + 1}: {error}. "
                f"Retrying in {record.delay:.2f}s"
            )

        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(retries + 1),
            wait=wait,
            before_sleep=before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            return await retrying(self._classified(request))
        except MarketDataError as e:
            if attempts:
                logger.error(f"Request failed after {len(attempts) + 1} attempts: {e}")
            raise

    @staticmethod
    def _classified(request: Callable[[], Awaitable[Any]]) -> Callable[[], Awaitable[Any]]:
        async def call() -> Any:
            try:
                return await request()
            except MarketDataError:
                raise
            except Exception as e:
                classified = classify_error(e)
                if classified is None:
                    raise
                raise classified from e

        return call
