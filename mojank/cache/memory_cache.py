"""In-process TTL cache implementation."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic

from mojank.cache.base import CacheProvider, K, V


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


class MemoryCache(CacheProvider[K, V]):
    """
    Dict-backed cache with expire-after-write semantics.

    Expired entries are treated as absent and dropped when read; call
    ``cleanup_expired`` to bound memory without waiting for reads.

    Example:
        cache: MemoryCache[str, int] = MemoryCache(default_ttl=60)
        await cache.set("notch", 1)
        value = await cache.get("notch")
    """

    def __init__(
        self,
        default_ttl: float = 1200,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize memory cache.

        Args:
            default_ttl: Default TTL in seconds (20 minutes)
            clock: Monotonic time source, in seconds
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: K) -> V | None:
        """Retrieve cached value, None if miss or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    async def set(self, key: K, value: V) -> None:
        """Store value, expiring ``default_ttl`` after now."""
        expires_at = self._clock() + self.default_ttl
        async with self._lock:
            self._entries[key] = CacheEntry(value, expires_at)

    async def invalidate(self, key: K) -> None:
        """Remove specific entry."""
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Clear all cached entries."""
        async with self._lock:
            self._entries.clear()

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        async with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    async def close(self) -> None:
        """Drop all entries."""
        await self.clear()

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet dropped."""
        return len(self._entries)
