"""Response Cache - Imperative Shell.

In-memory store for decoded JSON responses. Each entry stays fresh for
the revalidation period its feed asks for (5 minutes for BMKG, 10 for
OpenWeatherMap); after that the next request goes upstream again.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable


logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    payload: Any
    stored_at: float
    ttl_seconds: float


def make_key(url: str, params: dict[str, Any] | None = None) -> str:
    """Build a cache key from a URL and its query parameters."""
    if not params:
        return url
    query = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return f"{url}?{query}"


class ResponseCache:
    """Thread-safe TTL cache for upstream JSON payloads."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty cache.

        Args:
            clock: Monotonic time source, in seconds
        """
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return a fresh payload, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= entry.ttl_seconds:
                del self._entries[key]
                return None
            return entry.payload

    def set(self, key: str, payload: Any, ttl_seconds: float) -> None:
        """Store a payload. A non-positive TTL disables caching."""
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = _Entry(
                payload=payload,
                stored_at=self._clock(),
                ttl_seconds=ttl_seconds,
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
