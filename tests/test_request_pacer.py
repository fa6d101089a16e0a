"""
Unit tests for RequestPacer
"""
import asyncio

import pytest

from src.services.request_pacer import RequestPacer


def make_pacer(clock, min_interval=1.5):
    return RequestPacer(min_interval=min_interval, clock=clock, sleep=clock.sleep)


@pytest.mark.asyncio
async def test_first_request_never_waits(fake_clock):
    """First acquire is granted immediately"""
    pacer = make_pacer(fake_clock)

    await pacer.acquire()

    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_back_to_back_requests_are_spaced(fake_clock):
    """Second immediate acquire waits the full interval"""
    pacer = make_pacer(fake_clock)

    await pacer.acquire()
    await pacer.acquire()

    assert fake_clock.sleeps == [pytest.approx(1.5)]


@pytest.mark.asyncio
async def test_waits_only_for_remaining_interval(fake_clock):
    """Elapsed time counts towards the interval"""
    pacer = make_pacer(fake_clock)

    await pacer.acquire()
    fake_clock.advance(1.0)
    await pacer.acquire()

    assert fake_clock.sleeps == [pytest.approx(0.5)]


@pytest.mark.asyncio
async def test_no_wait_after_interval_elapsed(fake_clock):
    """No wait once the interval has passed"""
    pacer = make_pacer(fake_clock)

    await pacer.acquire()
    fake_clock.advance(2.0)
    await pacer.acquire()

    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_concurrent_callers_are_serialized(fake_clock):
    """Grants for concurrent callers are at least min_interval apart"""
    pacer = make_pacer(fake_clock)
    granted = []

    async def worker():
        await pacer.acquire()
        granted.append(fake_clock())

    await asyncio.gather(*(worker() for _ in range(5)))

    assert len(granted) == 5
    for previous, current in zip(granted, granted[1:]):
        assert current - previous >= 1.5 - 1e-9


@pytest.mark.asyncio
async def test_second_call_ten_ms_later_waits_until_interval(fake_clock):
    """A call 10ms after another is granted 1.5s after the first"""
    pacer = make_pacer(fake_clock)
    start = fake_clock()
    granted = {}

    async def first():
        await pacer.acquire()
        granted["first"] = fake_clock()

    async def second():
        await fake_clock.sleep(0.01)
        await pacer.acquire()
        granted["second"] = fake_clock()

    await asyncio.gather(first(), second())

    assert granted["first"] == pytest.approx(start)
    assert granted["second"] == pytest.approx(start + 1.5)
    assert granted["second"] - granted["first"] >= 1.5 - 1e-9


@pytest.mark.asyncio
async def test_zero_interval_never_waits(fake_clock):
    """A zero interval disables pacing"""
    pacer = make_pacer(fake_clock, min_interval=0)

    for _ in range(3):
        await pacer.acquire()

    assert fake_clock.sleeps == []


def test_negative_interval_rejected(fake_clock):
    """Negative interval is a configuration error"""
    with pytest.raises(ValueError):
        make_pacer(fake_clock, min_interval=-1)


@pytest.mark.asyncio
async def test_get_status(fake_clock):
    """Status reports the remaining wait"""
    pacer = make_pacer(fake_clock)

    status = pacer.get_status()
    assert status.last_request_time is None
    assert status.time_until_next_request == 0.0
    assert status.is_rate_limited is False

    await pacer.acquire()
    fake_clock.advance(0.5)

    status = pacer.get_status()
    assert status.last_request_time == pytest.approx(1000.0)
    assert status.time_until_next_request == pytest.approx(1.0)
    assert status.is_rate_limited is True
    assert status.as_dict()["min_interval"] == 1.5

    fake_clock.advance(5)
    assert pacer.get_status().is_rate_limited is False
