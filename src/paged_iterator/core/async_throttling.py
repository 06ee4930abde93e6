"""Spacing of outbound page requests."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable


class AsyncMinIntervalThrottler:
    """Keeps at least ``min_interval_seconds`` between page requests.

    Waiters are served one at a time, so several iterators sharing one
    fetcher are spaced out as well.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._interval = max(0.0, float(min_interval_seconds))
        self._clock = clock or time.monotonic
        self._sleep = sleeper or asyncio.sleep
        self._lock = asyncio.Lock()
        self._next_allowed_at: float | None = None

    @property
    def interval(self) -> float:
        return self._interval

    async def wait(self) -> float:
        """Block until the next request may go out; returns seconds slept."""
        async with self._lock:
            now = self._clock()
            delay = 0.0
            if self._next_allowed_at is not None and self._next_allowed_at > now:
                delay = self._next_allowed_at - now
                await self._sleep(delay)
                now = self._clock()
            self._next_allowed_at = now + self._interval
            return delay

    def reset(self) -> None:
        self._next_allowed_at = None


__all__ = [
    "AsyncMinIntervalThrottler",
]
