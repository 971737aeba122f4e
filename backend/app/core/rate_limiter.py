"""Sliding-window rate limiter used to throttle outbound SMS."""

import time
from collections import defaultdict
from collections.abc import Callable
from threading import Lock


class RateLimiter:
    """Allows at most ``max_requests`` hits per key inside a rolling window.

    Keys are arbitrary strings, e.g. an OTP recipient's phone number.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, list[float]] = defaultdict(list)
        self._lock = Lock()

    def _prune(self, key: str, now: float) -> list[float]:
        cutoff = now - self.window_seconds
        hits = [t for t in self._hits[key] if t > cutoff]
        self._hits[key] = hits
        return hits

    def is_allowed(self, key: str) -> bool:
        """Record a hit for *key* and return False when the limit is exceeded."""
        now = self._clock()
        with self._lock:
            hits = self._prune(key, now)
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def retry_after(self, key: str) -> int:
        """Seconds until *key* may be used again (0 when it already may)."""
        now = self._clock()
        with self._lock:
            hits = self._prune(key, now)
            if len(hits) < self.max_requests:
                return 0
            return max(1, int(hits[0] + self.window_seconds - now))

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
