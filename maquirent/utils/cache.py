"""
In-memory TTL cache

String-keyed map whose entries expire after a per-entry time-to-live.
Expired entries are evicted lazily on read and in bulk by cleanup().
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar('T')

DATA_CACHE_TTL = 10 * 60
SEARCH_CACHE_TTL = 5 * 60
CLEANUP_INTERVAL = 5 * 60


@dataclass
class CacheItem(Generic[T]):
    data: T
    timestamp: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


class TTLCache(Generic[T]):
    """
    Thread-safe TTL cache.

    Args:
        default_ttl: Seconds an entry lives when set() gets no ttl
        clock: Monotonic time source, injectable for tests
    """

    def __init__(self, default_ttl: float = 5 * 60, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._items: Dict[str, CacheItem[T]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, data: T, ttl: Optional[float] = None) -> None:
        item = CacheItem(data=data, timestamp=self._clock(), ttl=ttl or self.default_ttl)
        with self._lock:
            self._items[key] = item

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            if item.is_expired(self._clock()):
                del self._items[key]
                return None
            return item.data

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def cleanup(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, item in self._items.items() if item.is_expired(now)]
            for key in expired:
                del self._items[key]
        return len(expired)


class CacheRegistry:
    """
    Holds the application's data and search caches.

    One registry is created per Flask app (see create_app) and reached
    through app.extensions['maquirent.caches'].
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, cleanup_interval: float = CLEANUP_INTERVAL):
        self._clock = clock
        self.cleanup_interval = cleanup_interval
        self.data_cache: TTLCache[Any] = TTLCache(DATA_CACHE_TTL, clock)
        self.search_cache: TTLCache[Any] = TTLCache(SEARCH_CACHE_TTL, clock)
        self._last_cleanup = clock()

    def all(self):
        return (self.data_cache, self.search_cache)

    def cleanup_if_due(self) -> bool:
        """Run cleanup() on every cache when the interval has elapsed."""
        now = self._clock()
        if now - self._last_cleanup < self.cleanup_interval:
            return False
        for cache in self.all():
            cache.cleanup()
        self._last_cleanup = now
        return True
