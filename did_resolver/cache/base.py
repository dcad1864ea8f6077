"""Abstract base classes for cache."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Text

from ..core.error import BaseError


class CacheError(BaseError):
    """Base class for cache-related errors."""


class BaseCache(ABC):
    """Abstract cache interface.

    Keys are base DIDs; values are resolution results. Implementations must
    tolerate concurrent use from multiple tasks.
    """

    @abstractmethod
    async def get(self, key: Text):
        """
        Get an item from the cache.

        Args:
            key: the key to retrieve an item for

        Returns:
            The record found or `None`

        """

    @abstractmethod
    async def set(self, key: Text, value: Any, ttl: Optional[float] = None):
        """
        Add an item to the cache with an optional ttl.

        Args:
            key: the key for which to set an item
            value: the value to store in the cache
            ttl: number of seconds that the record should persist, falling back
                to the cache default when not given

        """

    @abstractmethod
    async def delete(self, key: Text):
        """
        Remove an item from the cache, if present.

        Args:
            key: the key to remove

        """

    @abstractmethod
    async def clear(self):
        """Remove all items from the cache."""

    @abstractmethod
    async def size(self) -> int:
        """Count the unexpired items in the cache."""

    def __repr__(self) -> str:
        """Human readable representation of this instance."""
        return "<{}>".format(self.__class__.__name__)
