"""Abstract cache interface."""

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheProvider(ABC, Generic[K, V]):
    """Abstract base class for expiring key/value caches."""

    @abstractmethod
    async def get(self, key: K) -> V | None:
        """
        Retrieve a cached value.

        Args:
            key: Cache key

        Returns:
            Cached value or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, key: K, value: V) -> None:
        """
        Store a value for the cache's fixed TTL.

        Args:
            key: Cache key
            value: Value to cache
        """
        ...

    @abstractmethod
    async def invalidate(self, key: K) -> None:
        """Remove specific entry from cache."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release any held resources."""
        ...

    async def __aenter__(self) -> "CacheProvider[K, V]":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
