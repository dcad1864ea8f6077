"""Basic in-memory cache implementation."""

import logging
import threading
import time
from typing import Any, Callable, NamedTuple, Optional, Text

from .base import BaseCache, CacheError

LOGGER = logging.getLogger(__name__)

_UNSET = object()


class CacheEntry(NamedTuple):
    """A cached value and its lifetime bounds."""

    result: Any
    cached_at: float
    expires_at: Optional[float]

    def expired(self, now: float) -> bool:
        """Check whether the entry is past its expiry time."""
        return self.expires_at is not None and now > self.expires_at


class InMemoryCache(BaseCache):
    """Basic in-memory cache class."""

    DEFAULT_TTL = 300

    def __init__(
        self,
        default_ttl: Optional[float] = _UNSET,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize a `InMemoryCache` instance.

        Args:
            default_ttl: seconds an entry lives when `set` gets no ttl;
                `None` keeps entries until deleted
            clock: monotonic time source, in seconds
        """
        if default_ttl is _UNSET:
            default_ttl = self.DEFAULT_TTL
        if default_ttl is not None and default_ttl < 0:
            raise CacheError("Cache TTL must not be negative")
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._cache = {}

    def _remove_expired_cache_items(self):
        """Remove all expired items from cache; caller holds the lock."""
        now = self._clock()
        for key in [key for key, entry in self._cache.items() if entry.expired(now)]:
            del self._cache[key]

    async def get(self, key: Text):
        """
        Get an item from the cache.

        An expired entry is evicted and `None` returned.

        Args:
            key: the key to retrieve an item for

        Returns:
            The record found or `None`

        """
        with self._lock:
            entry = self._cache.get(key)
            if not entry:
                return None
            if entry.expired(self._clock()):
                LOGGER.debug("Cache entry for %s expired", key)
                del self._cache[key]
                return None
            return entry.result

    async def set(self, key: Text, value: Any, ttl: Optional[float] = None):
        """
        Add an item to the cache with an optional ttl.

        Overwrites existing cache entries.

        Args:
            key: the key for which to set an item
            value: the value to store in the cache
            ttl: number of seconds that the record should persist

        """
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            now = self._clock()
            expires_at = now + ttl if ttl is not None else None
            self._cache[key] = CacheEntry(value, now, expires_at)

    async def delete(self, key: Text):
        """
        Remove an item from the cache, if present.

        Args:
            key: the key to remove

        """
        with self._lock:
            self._cache.pop(key, None)

    async def clear(self):
        """Remove all items from the cache."""
        with self._lock:
            self._cache = {}

    async def size(self) -> int:
        """Count the unexpired items in the cache."""
        with self._lock:
            self._remove_expired_cache_items()
            return len(self._cache)
