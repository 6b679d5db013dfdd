"""
Request quota shared by every outbound API call.

The limiter follows the generic cell rate algorithm: a quota of N requests per
minute emits one cell every 60/N seconds and allows a burst of N cells. Each
admitted request then waits an additional random jitter so that callers which
become eligible at the same instant do not hit the API in lockstep.

Usage:
    limiter = RateLimiter(requests_per_minute=300, max_jitter=1.0)

    async with httpx.AsyncClient(base_url=...) as http:
        client = RateLimitedClient(http, limiter)
        response = await client.get("/quests")
"""
import asyncio
import logging
import random
import time
from typing import Any, Callable, Dict, Optional, Awaitable

import httpx

logger = logging.getLogger(__name__)


class RateLimiter:
    """Shared per-minute quota with jittered admission."""

    def __init__(
        self,
        requests_per_minute: int = 300,
        max_jitter: float = 1.0,
        burst: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        jitter: Optional[Callable[[float, float], float]] = None,
    ):
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be positive")

        self.requests_per_minute = requests_per_minute
        self.max_jitter = max_jitter
        self.burst = burst or requests_per_minute
        self.interval = 60.0 / requests_per_minute

        self._clock = clock
        self._sleep = sleep
        self._jitter = jitter or random.uniform

        # Theoretical arrival time of the next cell
        self._tat: Optional[float] = None
        self._lock = asyncio.Lock()

        logger.debug(
            f"RateLimiter initialized: {requests_per_minute}/min, "
            f"burst={self.burst}, jitter<={max_jitter}s"
        )

    def _reserve(self) -> float:
        """Reserve the next cell and return how long to wait for it."""
        now = self._clock()
        tat = now if self._tat is None else max(self._tat, now)
        tolerance = self.interval * (self.burst - 1)

        delay = max(0.0, tat - tolerance - now)
        self._tat = tat + self.interval
        return delay

    async def acquire(self) -> float:
        """
        Wait until a request may be sent.

        Only the reservation is serialized; the wait itself happens outside
        the lock so admitted requests proceed concurrently.

        Returns:
            Total seconds waited, quota delay plus jitter
        """
        async with self._lock:
            delay = self._reserve()

        if self.max_jitter > 0:
            delay += self._jitter(0.0, self.max_jitter)

        if delay > 0:
            await self._sleep(delay)
        return delay


class NoopRateLimiter:
    """Limiter that admits every request immediately."""

    async def acquire(self) -> float:
        return 0.0


class RateLimitedClient:
    """HTTP client whose every request passes through a shared limiter."""

    def __init__(self, http: httpx.AsyncClient, limiter):
        self.http = http
        self.limiter = limiter

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """
        Send a GET request once the limiter admits it.

        Errors raised by httpx are not caught here.
        """
        await self.limiter.acquire()
        return await self.http.get(url, params=params)
