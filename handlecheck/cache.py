"""In-memory TTL cache for direct probe results.

Entries are keyed by (platform, handle) with the handle compared
case-insensitively. Stale entries are evicted lazily on read; there is
no size bound beyond TTL expiry.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from .models import ProbeResult
from .platforms import Platform

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 3600


class CacheEntry:
    """Represents a cached value with timestamp."""

    __slots__ = ("value", "timestamp")

    def __init__(self, value: ProbeResult, timestamp: float):
        self.value = value
        self.timestamp = timestamp

    def is_expired(self, ttl_seconds: float, now: float) -> bool:
        """Check if this entry has expired."""
        return now - self.timestamp >= ttl_seconds


class ProbeCache:
    """
    Thread-safe probe result cache.

    Usage:
        cache = ProbeCache(ttl_seconds=24 * 3600)
        cache.put(Platform.GITHUB, "octocat", result)
        cached = cache.get(Platform.GITHUB, "OctoCat")
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry from insertion
            clock: Time source in seconds (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _make_key(platform: Platform | str, handle: str) -> str:
        return f"{Platform.parse(platform).value}:{(handle or '').lower()}"

    def get(self, platform: Platform | str, handle: str) -> Optional[ProbeResult]:
        """
        Get a cached result if present and fresh.

        Returns:
            Cached result, or None if missing or expired (expired entries are evicted)
        """
        key = self._make_key(platform, handle)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self.ttl_seconds, self.clock()):
                del self._entries[key]
                logger.debug(f"Evicted stale probe cache entry {key}")
                return None
            return entry.value

    def put(self, platform: Platform | str, handle: str, result: ProbeResult) -> None:
        """Store a result, replacing any previous entry wholesale."""
        key = self._make_key(platform, handle)
        with self._lock:
            self._entries[key] = CacheEntry(value=result, timestamp=self.clock())

    def delete(self, platform: Platform | str, handle: str) -> None:
        key = self._make_key(platform, handle)
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def purge_expired(self) -> int:
        """Evict every stale entry and return how many were removed."""
        with self._lock:
            now = self.clock()
            stale = [k for k, e in self._entries.items() if e.is_expired(self.ttl_seconds, now)]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "ttl_seconds": self.ttl_seconds,
                "entries": len(self._entries),
            }
