"""
Rate Limiter for TMDB API Calls

Keeps outgoing calls under TMDB's request rate with an in-memory sliding
window. The limiter can wrap any executor (``RateLimitedExecutor``,
``AsyncRateLimitedExecutor``) or be passed directly to a
``MiddlewareExecutor`` as a middleware (``middleware_async`` for
``AsyncMiddlewareExecutor``).
"""

import asyncio
import os
import threading
import time
from collections import deque
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from tmdbkit.api_client import ErrorType, Executor, TMDBError
from tmdbkit.async_client import AsyncExecutor
from tmdbkit.logging_config import get_logger
from tmdbkit.metrics import track_rate_limit_exceeded, update_rate_limit_metrics

logger = get_logger(__name__)

DEFAULT_MAX_CALLS = 40
DEFAULT_PERIOD = 10.0


class RateLimitError(TMDBError):
    """The rate limiter refused a call in non-blocking mode."""

    def __init__(self, message: str, retry_after: float = 0.0):
        super().__init__(message, ErrorType.RATE_LIMIT)
        self.retry_after = retry_after


class RateLimiter:
    """
    Sliding window rate limiter.

    At most ``max_calls`` calls are allowed in any ``period`` seconds. The
    limiter is thread-safe; a single instance can be shared by every client
    of a process.

    Attributes:
        max_calls: Maximum number of calls per window
        period: Window length in seconds
    """

    def __init__(self, max_calls: Optional[int] = None, period: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize rate limiter.

        Args:
            max_calls: Calls per window (default: 40 or TMDB_RATE_LIMIT_CALLS)
            period: Window in seconds (default: 10 or TMDB_RATE_LIMIT_PERIOD)
            clock: Monotonic time source
            sleep: Function used to wait for a free slot
        """
        if max_calls is None:
            max_calls = int(os.getenv("TMDB_RATE_LIMIT_CALLS", str(DEFAULT_MAX_CALLS)))
        if period is None:
            period = float(os.getenv("TMDB_RATE_LIMIT_PERIOD", str(DEFAULT_PERIOD)))
        if max_calls <= 0:
            raise ValueError("max_calls must be positive")
        if period <= 0:
            raise ValueError("period must be positive")

        self.max_calls = max_calls
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._calls = deque()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        """Drop timestamps that left the window."""
        while self._calls and now - self._calls[0] >= self.period:
            self._calls.popleft()

    def _try_acquire(self) -> float:
        """
        Take a slot if one is free.

        Returns:
            0 when a slot was taken, otherwise the seconds until one frees up
        """
        with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self._calls) < self.max_calls:
                self._calls.append(now)
                usage = len(self._calls)
                update_rate_limit_metrics(usage, self.max_calls, self.max_calls - usage)
                return 0.0
            return self.period - (now - self._calls[0])

    def _refuse(self, wait: float):
        track_rate_limit_exceeded()
        logger.warning("tmdb_rate_limit_exceeded", max_calls=self.max_calls,
                       period=self.period, retry_after=round(wait, 3))
        raise RateLimitError(
            f"Rate limit reached ({self.max_calls} calls per {self.period:g}s). "
            f"Retry in {wait:.2f}s.",
            retry_after=wait,
        )

    def acquire(self, block: bool = True) -> None:
        """
        Take a slot in the current window.

        Args:
            block: Wait for a free slot instead of failing

        Raises:
            RateLimitError: Window is full and ``block`` is False
        """
        while True:
            wait = self._try_acquire()
            if wait <= 0:
                return
            if not block:
                self._refuse(wait)
            logger.debug("tmdb_rate_limit_wait", wait_seconds=round(wait, 3))
            self._sleep(wait)

    async def acquire_async(self, block: bool = True) -> None:
        """Awaitable variant of ``acquire``; waits with ``asyncio.sleep``."""
        while True:
            wait = self._try_acquire()
            if wait <= 0:
                return
            if not block:
                self._refuse(wait)
            logger.debug("tmdb_rate_limit_wait", wait_seconds=round(wait, 3))
            await asyncio.sleep(wait)

    def check_limit(self) -> Tuple[bool, int, Optional[str]]:
        """
        Check if the rate limit has been exceeded, without taking a slot.

        Returns:
            Tuple of (allowed, remaining_calls, error_message):
                - allowed: True if a call would be allowed now
                - remaining_calls: Free slots in the current window
                - error_message: Error message if limit reached, None otherwise
        """
        with self._lock:
            now = self._clock()
            self._evict(now)
            remaining = self.max_calls - len(self._calls)
            if remaining > 0:
                return (True, remaining, None)
            wait = self.period - (now - self._calls[0])
        error_msg = (
            f"Rate limit reached ({self.max_calls} calls per {self.period:g}s). "
            f"Retry in {wait:.2f}s."
        )
        return (False, 0, error_msg)

    def get_usage_stats(self) -> Dict[str, Any]:
        """
        Get current usage statistics.

        Returns:
            Dictionary with call_count, max_calls, remaining and period
        """
        with self._lock:
            self._evict(self._clock())
            call_count = len(self._calls)
        return {
            "call_count": call_count,
            "max_calls": self.max_calls,
            "remaining": max(0, self.max_calls - call_count),
            "period": self.period,
        }

    def reset(self) -> None:
        """Forget every recorded call."""
        with self._lock:
            self._calls.clear()
        update_rate_limit_metrics(0, self.max_calls, self.max_calls)

    def __call__(self, url: str, params: Dict[str, str], call_next: Callable[[str, Dict[str, str]], Any]) -> Any:
        """
        Middleware entry point for ``MiddlewareExecutor``.

        Blocks the calling thread while waiting; use ``middleware_async``
        with ``AsyncMiddlewareExecutor``.
        """
        self.acquire()
        return call_next(url, params)

    async def middleware_async(self, url: str, params: Dict[str, str],
                               call_next: Callable[[str, Dict[str, str]], Awaitable[Any]]) -> Any:
        """Middleware entry point for ``AsyncMiddlewareExecutor``."""
        await self.acquire_async()
        return await call_next(url, params)

    def __repr__(self):
        return f"RateLimiter(max_calls={self.max_calls}, period={self.period})"


class RateLimitedExecutor(Executor):
    """
    Executor decorator that takes a rate limiter slot before each call.

    Example:
        executor = RateLimitedExecutor(RequestsExecutor(), RateLimiter(40, 10))
        client = Client(executor=executor)
    """

    def __init__(self, inner: Executor, limiter: Optional[RateLimiter] = None, block: bool = True):
        self.inner = inner
        self.limiter = limiter or get_tmdb_rate_limiter()
        self.block = block

    def execute(self, url: str, params: Dict[str, str]) -> Any:
        self.limiter.acquire(block=self.block)
        return self.inner.execute(url, params)

    def close(self):
        self.inner.close()

    def __repr__(self):
        return f"RateLimitedExecutor(inner={self.inner!r}, limiter={self.limiter!r})"


class AsyncRateLimitedExecutor(AsyncExecutor):
    """Async counterpart of ``RateLimitedExecutor``."""

    def __init__(self, inner: AsyncExecutor, limiter: Optional[RateLimiter] = None, block: bool = True):
        self.inner = inner
        self.limiter = limiter or get_tmdb_rate_limiter()
        self.block = block

    async def execute(self, url: str, params: Dict[str, str]) -> Any:
        await self.limiter.acquire_async(block=self.block)
        return await self.inner.execute(url, params)

    async def close(self):
        await self.inner.close()

    def __repr__(self):
        return f"AsyncRateLimitedExecutor(inner={self.inner!r}, limiter={self.limiter!r})"


# Process-wide limiter shared by executors created without an explicit one
tmdb_rate_limiter = None


def get_tmdb_rate_limiter() -> RateLimiter:
    """
    Get or create the global TMDB rate limiter instance.

    Returns:
        RateLimiter configured from the environment
    """
    global tmdb_rate_limiter

    if tmdb_rate_limiter is None:
        tmdb_rate_limiter = RateLimiter()

    return tmdb_rate_limiter
