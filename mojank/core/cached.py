"""Caching layer over the resolver."""

import time
from collections.abc import Callable, Sequence
from uuid import UUID

from mojank.cache.memory_cache import MemoryCache
from mojank.config import MojankConfig
from mojank.core.fetcher import Fetcher
from mojank.core.resolver import Mojank
from mojank.models.profile import Profile, SimpleProfile
from mojank.models.result import MojankResult


def normalize(username: str) -> str:
    """Usernames are case-insensitive."""
    return username.lower()


class CachedMojank(Mojank):
    """
    Mojank wrapper that caches conclusive results.

    Three caches are kept, each expiring entries ``cache_ttl_seconds``
    after they were written: username to simple profile, username to full
    profile and uuid to full profile. Full profile lookups populate both
    full profile caches, and the simple profile lookups fall back to
    projecting a cached full profile. Inconclusive failures are never
    stored.

    Example:
        async with CachedMojank() as mojank:
            await mojank.username_to_profile("Notch")
            # Served from cache
            await mojank.uuid_to_username(uuid)
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        config: MojankConfig | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cached resolver.

        Args:
            fetcher: Fetcher to issue requests with, an HttpxFetcher if None
            config: MojankConfig instance, uses defaults if None
            ttl_seconds: Cache duration, config.cache_ttl_seconds if None
            clock: Monotonic time source shared by the caches
        """
        super().__init__(fetcher, config)
        ttl = ttl_seconds if ttl_seconds is not None else self.config.cache_ttl_seconds
        self._simple_by_name: MemoryCache[str, MojankResult[SimpleProfile]] = MemoryCache(ttl, clock)
        self._profile_by_name: MemoryCache[str, MojankResult[Profile]] = MemoryCache(ttl, clock)
        self._profile_by_uuid: MemoryCache[UUID, MojankResult[Profile]] = MemoryCache(ttl, clock)

    async def close(self) -> None:
        await self.clear_cache()
        await super().close()

    async def username_to_simple_profile(self, username: str) -> MojankResult[SimpleProfile]:
        cached = await self._cached_simple_profile(username)
        if cached is not None:
            self._log.debug("cache_hit", cache="simple_by_name", username=username)
            return cached

        result = await super().username_to_simple_profile(username)
        if result.is_conclusive:
            await self._simple_by_name.set(normalize(username), result)
        return result

    async def usernames_to_simple_profiles(
        self, usernames: Sequence[str]
    ) -> MojankResult[list[SimpleProfile]]:
        known: list[SimpleProfile] = []
        unknown: list[str] = []
        reason: str | None = None
        for username in usernames:
            cached = await self._cached_simple_profile(username)
            if cached is None:
                unknown.append(username)
            elif cached.is_success:
                known.append(cached.get())
            else:
                reason = cached.get_reason()

        if not unknown:
            return MojankResult.success_or_partial(known, reason, True)
        self._log.debug("bulk_cache_split", known=len(known), unknown=len(unknown))

        result = await super().usernames_to_simple_profiles(unknown)
        if not result.is_success:
            reason = result.get_reason()
            if not result.is_partial and not known:
                return result

        fetched = result.get_or_else(list)
        for profile in fetched:
            await self._simple_by_name.set(normalize(profile.name), MojankResult.success(profile))
        known.extend(fetched)
        return MojankResult.success_or_partial(known, reason, result.is_conclusive)

    async def username_to_profile(self, username: str) -> MojankResult[Profile]:
        normalized = normalize(username)
        cached = await self._profile_by_name.get(normalized)
        if cached is not None:
            self._log.debug("cache_hit", cache="profile_by_name", username=username)
            return cached

        result = await super().username_to_profile(username)
        if result.is_conclusive:
            await self._profile_by_name.set(normalized, result)
        if result.is_success:
            await self._profile_by_uuid.set(result.get().id, result)
        return result

    async def uuid_to_profile(self, uuid: UUID) -> MojankResult[Profile]:
        cached = await self._profile_by_uuid.get(uuid)
        if cached is not None:
            self._log.debug("cache_hit", cache="profile_by_uuid", uuid=str(uuid))
            return cached

        result = await super().uuid_to_profile(uuid)
        if result.is_conclusive:
            await self._profile_by_uuid.set(uuid, result)
        if result.is_success:
            await self._profile_by_name.set(normalize(result.get().name), result)
        return result

    async def invalidate_username(self, username: str) -> None:
        """Remove a username from both name caches."""
        normalized = normalize(username)
        await self._simple_by_name.invalidate(normalized)
        await self._profile_by_name.invalidate(normalized)

    async def invalidate_uuid(self, uuid: UUID) -> None:
        """Remove a uuid, and the name its cached profile was stored under."""
        cached = await self._profile_by_uuid.get(uuid)
        await self._profile_by_uuid.invalidate(uuid)
        if cached is not None and cached.is_success:
            await self._profile_by_name.invalidate(normalize(cached.get().name))

    async def clear_cache(self) -> None:
        """Clear all cached data."""
        await self._simple_by_name.clear()
        await self._profile_by_name.clear()
        await self._profile_by_uuid.clear()

    async def cleanup_expired(self) -> int:
        """
        Drop expired entries from every cache.

        Returns:
            Number of entries removed
        """
        removed = 0
        for cache in (self._simple_by_name, self._profile_by_name, self._profile_by_uuid):
            removed += await cache.cleanup_expired()
        return removed

    async def _cached_simple_profile(self, username: str) -> MojankResult[SimpleProfile] | None:
        """Simple profile cache, falling back to projecting a cached full profile."""
        normalized = normalize(username)
        cached = await self._simple_by_name.get(normalized)
        if cached is not None:
            return cached

        profile = await self._profile_by_name.get(normalized)
        if profile is not None:
            return profile.map(Profile.to_simple)
        return None
