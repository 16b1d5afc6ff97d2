"""In-memory minimum-interval rate limiter for outbound API calls."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from augment_engine.observability.logger import get_logger

logger = get_logger("rate_limiter")


class MinIntervalRateLimiter:
    """Spaces calls at least ``min_interval`` seconds apart.

    A caller arriving early waits for the remainder of the interval instead
    of being rejected. Waiters are served one at a time.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self._min_interval:
                    wait = self._min_interval - elapsed
                    logger.debug("rate_limit_wait", wait_s=round(wait, 3))
                    await self._sleep(wait)
            self._last_request = self._clock()
