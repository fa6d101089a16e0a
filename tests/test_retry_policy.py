"""
Unit tests for RetryPolicy
"""
from unittest.mock import AsyncMock

import aiohttp
import pytest

from src.services.errors import (
    ClientError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TimedOutError,
)
from src.services.retry_policy import RetryPolicy


def make_policy(clock, max_attempts=3, base_delay=1.0):
    return RetryPolicy(max_attempts=max_attempts, base_delay=base_delay, sleep=clock.sleep)


@pytest.mark.asyncio
async def test_success_on_first_attempt(fake_clock):
    """No retries when the request succeeds"""
    policy = make_policy(fake_clock)
    request = AsyncMock(return_value={"ok": True})

    result = await policy.execute(request)

    assert result == {"ok": True}
    assert request.await_count == 1
    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_server_errors_then_success(fake_clock):
    """5xx is retried with exponential backoff"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=[ServerError("HTTP 500"), ServerError("HTTP 502"), {"ok": True}])

    result = await policy.execute(request)

    assert result == {"ok": True}
    assert request.await_count == 3
    assert fake_clock.sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_bound(fake_clock):
    """Total attempts never exceed max_attempts + 1"""
    policy = make_policy(fake_clock, max_attempts=3)
    request = AsyncMock(side_effect=ServerError("HTTP 503"))

    with pytest.raises(ServerError):
        await policy.execute(request)

    assert request.await_count == 4
    assert fake_clock.sleeps == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
async def test_max_attempts_override(fake_clock):
    """Per-call override replaces the configured retry count"""
    policy = make_policy(fake_clock, max_attempts=3)
    request = AsyncMock(side_effect=ServerError("HTTP 503"))

    with pytest.raises(ServerError):
        await policy.execute(request, max_attempts=0)

    assert request.await_count == 1
    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_base_delay_override(fake_clock):
    """Per-call override replaces the backoff base"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=[ServerError(), ServerError(), "done"])

    await policy.execute(request, base_delay=0.5)

    assert fake_clock.sleeps == [0.5, 1.0]


@pytest.mark.asyncio
async def test_rate_limit_honours_retry_after(fake_clock):
    """Retry-After replaces the computed backoff"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=[RateLimitedError("HTTP 429", retry_after=7), "done"])

    result = await policy.execute(request)

    assert result == "done"
    assert fake_clock.sleeps == [7]


@pytest.mark.asyncio
async def test_rate_limit_without_retry_after_uses_backoff(fake_clock):
    """Missing Retry-After falls back to exponential backoff"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=[RateLimitedError("HTTP 429"), RateLimitedError("HTTP 429"), "done"])

    await policy.execute(request)

    assert fake_clock.sleeps == [1.0, 2.0]



@pytest.mark.asyncio
@pytest.mark.parametrize("retry_after", [float("inf"), float("nan"), -1.0])
async def test_rate_limit_unusable_retry_after_uses_backoff(fake_clock, retry_after):
    """Non-finite or negative Retry-After is ignored"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=[RateLimitedError("HTTP 429", retry_after=retry_after), "done"])

    result = await policy.execute(request)

    assert result == "done"
    assert fake_clock.sleeps == [1.0]
    assert policy.compute_delay(2, RateLimitedError(retry_after=retry_after)) == 4.0

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    NotFoundError("HTTP 404"),
    ClientError("HTTP 400"),
    NetworkError("refused"),
    TimedOutError("timeout"),
])
async def test_non_retryable_errors_fail_fast(fake_clock, error):
    """404, other 4xx, network and timeout errors are not retried"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=error)

    with pytest.raises(type(error)):
        await policy.execute(request)

    assert request.await_count == 1
    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_transport_errors_are_classified(fake_clock):
    """Raw aiohttp errors come out as NetworkError"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(NetworkError) as exc_info:
        await policy.execute(request)

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)
    assert request.await_count == 1


@pytest.mark.asyncio
async def test_timeouts_are_classified(fake_clock):
    """asyncio timeouts come out as TimedOutError"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=aiohttp.ServerTimeoutError("read timeout"))

    with pytest.raises(TimedOutError):
        await policy.execute(request)


@pytest.mark.asyncio
async def test_programming_errors_propagate_unchanged(fake_clock):
    """Non-transport exceptions are neither classified nor retried"""
    policy = make_policy(fake_clock)
    request = AsyncMock(side_effect=KeyError("price"))

    with pytest.raises(KeyError):
        await policy.execute(request)

    assert request.await_count == 1


def test_compute_delay_is_monotonic(fake_clock):
    """Backoff never decreases with the attempt index"""
    policy = make_policy(fake_clock, base_delay=1.0)
    error = ServerError()

    delays = [policy.compute_delay(attempt, error) for attempt in range(6)]

    assert delays == [1.0, 2.0, 4.0, 8.0, 16.0, 32.0]
    assert delays == sorted(delays)


def test_invalid_configuration(fake_clock):
    """Negative retries and non-positive base delay are rejected"""
    with pytest.raises(ValueError):
        make_policy(fake_clock, max_attempts=-1)
    with pytest.raises(ValueError):
        make_policy(fake_clock, base_delay=0)
