"""Tests for the minimum-interval rate limiter."""

from __future__ import annotations

from augment_engine.providers.rate_limiter import MinIntervalRateLimiter


class RecordingSleep:
    """Fake sleep that advances the fake clock instead of waiting."""

    def __init__(self, clock) -> None:
        self.clock = clock
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)
        self.clock.advance(seconds)


async def test_first_request_does_not_wait(clock):
    sleep = RecordingSleep(clock)
    limiter = MinIntervalRateLimiter(1.0, clock=clock, sleep=sleep)

    await limiter.acquire()

    assert sleep.waits == []


async def test_early_request_waits_for_remainder(clock):
    sleep = RecordingSleep(clock)
    limiter = MinIntervalRateLimiter(1.0, clock=clock, sleep=sleep)

    await limiter.acquire()
    clock.advance(0.25)
    await limiter.acquire()

    assert sleep.waits == [0.75]


async def test_request_after_interval_does_not_wait(clock):
    sleep = RecordingSleep(clock)
    limiter = MinIntervalRateLimiter(1.0, clock=clock, sleep=sleep)

    await limiter.acquire()
    clock.advance(2.0)
    await limiter.acquire()

    assert sleep.waits == []


async def test_back_to_back_requests_are_spaced(clock):
    sleep = RecordingSleep(clock)
    limiter = MinIntervalRateLimiter(1.0, clock=clock, sleep=sleep)

    for _ in range(3):
        await limiter.acquire()

    assert sleep.waits == [1.0, 1.0]
    assert clock.now == 2.0
