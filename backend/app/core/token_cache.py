"""In-memory bearer token cache with a fixed expiry window."""

import time
from collections.abc import Callable
from threading import Lock


class TokenCache:
    """Caches bearer tokens per account key until they expire.

    Instances are passed explicitly to the clients that need them, so tests and
    separate tenants never share tokens by accident.
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._tokens: dict[str, tuple[str, float]] = {}
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        """Return the cached token for *key*, or None if absent or expired."""
        with self._lock:
            entry = self._tokens.get(key)
            if entry is None:
                return None
            token, expires_at = entry
            if self._clock() >= expires_at:
                del self._tokens[key]
                return None
            return token

    def set(self, key: str, token: str) -> None:
        with self._lock:
            self._tokens[key] = (token, self._clock() + self.ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._tokens.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
