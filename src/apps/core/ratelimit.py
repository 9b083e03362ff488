"""In-memory sliding-window rate limiting keyed by client address."""

import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from django.conf import settings

logger = logging.getLogger(__name__)


def get_client_ip(request) -> str:
    """Extract the client IP, honouring X-Forwarded-For only behind a trusted proxy."""
    if getattr(settings, "TRUST_X_FORWARDED_FOR", False):
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "unknown")


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


class SlidingWindowRateLimiter:
    """
    Cap requests per key over a rolling window.

    ``hit`` prunes, checks and records under one lock, so concurrent callers
    never both squeeze into the last free slot. Every ``cleanup_interval``
    hits, keys whose hits have all expired are dropped under the same lock.
    """

    def __init__(
        self,
        name: str,
        *,
        max_requests: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: int = 100,
    ) -> None:
        self.name = name
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self.cleanup_interval = cleanup_interval
        self._hits_since_cleanup = 0
        self._lock = threading.Lock()
        # {key: deque[timestamp, ...]}, oldest first
        self._hits: dict[str, deque[float]] = {}

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request for ``key`` if it fits in the window."""
        now = self._clock()
        window_start = now - self.window

        with self._lock:
            self._hits_since_cleanup += 1
            if self._hits_since_cleanup >= self.cleanup_interval:
                self._hits_since_cleanup = 0
                self._drop_stale(window_start)

            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= window_start:
                hits.popleft()

            if len(hits) >= self.max_requests:
                retry_after = max(1, math.ceil(hits[0] + self.window - now))
                return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

            hits.append(now)
            return RateLimitDecision(allowed=True, remaining=self.max_requests - len(hits))

    def cleanup(self) -> None:
        """Drop keys whose hits have all left the window."""
        window_start = self._clock() - self.window
        with self._lock:
            self._drop_stale(window_start)

    def _drop_stale(self, window_start: float) -> None:
        # Caller holds self._lock
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in stale:
            del self._hits[key]
        if stale:
            logger.debug("Rate limiter '%s' dropped %d stale keys", self.name, len(stale))

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._hits_since_cleanup = 0


def _build_limiter(name: str) -> SlidingWindowRateLimiter:
    max_requests, window = settings.RATE_LIMITS[name]
    return SlidingWindowRateLimiter(name, max_requests=max_requests, window=window)


# Process-wide limiters (per worker)
api_limiter = _build_limiter("api")
contact_limiter = _build_limiter("contact")
