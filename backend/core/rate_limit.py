"""
Rate limiters consulted for every ``/api/`` request.

The gateway only asks ``limit(key)`` for a verdict. Deployments behind a
platform limiter can keep the no-op limiter; single-process deployments can
use the fixed window limiter.
"""
import time
from typing import Callable, Dict

from core.config import settings


class RateLimiter:
    def limit(self, key: str) -> bool:
        """Return True when a request for ``key`` may proceed"""
        raise NotImplementedError


class NoopRateLimiter(RateLimiter):
    def limit(self, key: str) -> bool:
        return True


class FixedWindowRateLimiter(RateLimiter):
    """Allow ``max_requests`` per key in each window of ``period`` seconds"""

    def __init__(self, max_requests: int, period: float, clock: Callable[[], float] = time.monotonic):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if period <= 0:
            raise ValueError("period must be positive")
        self.max_requests = max_requests
        self.period = period
        self._clock = clock
        self._window = None
        # Counts for the current window only; replaced when the window rolls over
        self._counts: Dict[str, int] = {}

    @property
    def tracked_keys(self) -> int:
        return len(self._counts)

    def limit(self, key: str) -> bool:
        window = int(self._clock() // self.period)
        if window != self._window:
            self._window = window
            self._counts = {}
        count = self._counts.get(key, 0)
        if count >= self.max_requests:
            return False
        self._counts[key] = count + 1
        return True


def build_rate_limiter() -> RateLimiter:
    if settings.rate_limit_requests <= 0:
        return NoopRateLimiter()
    return FixedWindowRateLimiter(settings.rate_limit_requests, settings.rate_limit_period)
