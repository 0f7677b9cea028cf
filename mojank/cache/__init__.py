"""Cache implementations."""

from mojank.cache.base import CacheProvider
from mojank.cache.memory_cache import MemoryCache

__all__ = ["CacheProvider", "MemoryCache"]
