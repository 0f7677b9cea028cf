"""Resolver - turns identity API calls into MojankResults."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar
from uuid import UUID

from mojank.config import MojankConfig
from mojank.core.fetcher import Fetcher, HttpxFetcher, RawResponse
from mojank.exceptions import (
    AddressResolutionError,
    DecodeError,
    FetchError,
    PropertyNotFoundError,
)
from mojank.logging import get_logger
from mojank.models.error import ApiError
from mojank.models.profile import Profile, SimpleProfile
from mojank.models.result import MojankResult
from mojank.models.skin import Skin

T = TypeVar("T")

NO_PROFILE_FOR_NAME = "Couldn't find any profile with that name"
NO_PROFILE_FOR_UUID = "Couldn't find any profile with that uuid"
NO_PROFILES_FOR_NAMES = "Couldn't find any profiles with those names"
UNRESOLVED_NAMES = "Couldn't resolve profiles for all names"
SERVICE_UNAVAILABLE = "Service unavailable"


class Mojank:
    """
    Wrapper around the Mojang identity API.

    Results are not cached; use ``CachedMojank`` to avoid being rate
    limited on repeated lookups.

    Example:
        async with Mojank() as mojank:
            result = await mojank.username_to_uuid("Notch")
            # Retry while the service is flaky
            result = await mojank.attempt(lambda m: m.username_to_uuid("Notch"))
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        config: MojankConfig | None = None,
    ):
        """
        Initialize resolver.

        Args:
            fetcher: Fetcher to issue requests with, an HttpxFetcher if None
            config: MojankConfig instance, uses defaults if None
        """
        self.config = config or MojankConfig()
        self.fetcher = fetcher or HttpxFetcher(config=self.config)
        self._log = get_logger("mojank")

    async def __aenter__(self) -> "Mojank":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    async def attempt(
        self,
        action: Callable[["Mojank"], Awaitable[MojankResult[T]]],
        max_attempts: int | None = None,
    ) -> MojankResult[T]:
        """
        Run an action until its result is conclusive.

        Use this to ride out inconclusive failures such as the service
        being down. Conclusive failures are returned straight away.

        Args:
            action: Called with this instance, returns the result to check
            max_attempts: Upper bound on calls, config.max_attempts if None

        Returns:
            The first conclusive result, or the last one
        """
        attempts = max_attempts if max_attempts is not None else self.config.max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        for i in range(1, attempts + 1):
            result = await action(self)
            if result.is_conclusive or i == attempts:
                return result
            self._log.info("attempt_retry", attempt=i, max_attempts=attempts, reason=result.get_reason())
        return result

    async def username_to_uuid(self, username: str) -> MojankResult[UUID]:
        """
        Fetch a player's uuid from their username, case-insensitive.

        Args:
            username: The player's username

        Returns:
            MojankResult holding the uuid
        """
        result = await self.username_to_simple_profile(username)
        return result.map(lambda profile: profile.id)

    async def username_to_simple_profile(self, username: str) -> MojankResult[SimpleProfile]:
        """Fetch a SimpleProfile from a username, case-insensitive."""
        return await self._request(
            NO_PROFILE_FOR_NAME,
            lambda: self.fetcher.get_simple_profile(username),
            SimpleProfile,
        )

    async def usernames_to_simple_profiles(
        self, usernames: Sequence[str]
    ) -> MojankResult[list[SimpleProfile]]:
        """
        Fetch SimpleProfiles in batches, case-insensitive.

        The result is a success if every username resolved, a partial if
        only some did (unresolved names are omitted), and a failure if none
        did or the service could not be reached. Larger inputs are split
        into chunks requested concurrently.

        The order of the returned profiles is not the order of ``usernames``.

        Args:
            usernames: Usernames to look up

        Returns:
            MojankResult holding the resolved profiles
        """
        usernames = list(usernames)
        size = self.config.bulk_chunk_size
        if len(usernames) <= size:
            return await self._bulk_chunk(usernames)

        chunks = [usernames[i:i + size] for i in range(0, len(usernames), size)]
        self._log.debug("bulk_chunked", usernames=len(usernames), chunks=len(chunks))
        outcomes = await asyncio.gather(
            *(self._bulk_chunk(chunk) for chunk in chunks),
            return_exceptions=True,
        )

        profiles: list[SimpleProfile] = []
        reason: str | None = None
        conclusive = True
        for outcome in outcomes:
            result = self._chunk_result(outcome)
            if not result.is_success:
                reason = result.get_reason()
                conclusive = conclusive and result.is_conclusive
            profiles.extend(result.get_or_else(list))

        if not profiles:
            return MojankResult.failure(reason, conclusive)
        return MojankResult.success_or_partial(profiles, reason, conclusive)

    async def username_to_profile(self, username: str) -> MojankResult[Profile]:
        """
        Fetch a full Profile from a username, case-insensitive.

        Resolves the uuid first, then fetches the profile for it.
        """
        result = await self.username_to_uuid(username)
        if result.is_failure:
            return result
        return await self.uuid_to_profile(result.get())

    async def uuid_to_username(self, uuid: UUID) -> MojankResult[str]:
        """Fetch a player's current username from their uuid."""
        result = await self.uuid_to_profile(uuid)
        return result.map(lambda profile: profile.name)

    async def uuid_to_profile(self, uuid: UUID) -> MojankResult[Profile]:
        """Fetch a full Profile from a uuid."""
        return await self._request(
            NO_PROFILE_FOR_UUID,
            lambda: self.fetcher.get_full_profile(uuid),
            Profile,
        )

    async def username_to_skin(self, username: str) -> MojankResult[Skin]:
        """Fetch and decode a player's skin from their username."""
        return _decode_skin(await self.username_to_profile(username))

    async def uuid_to_skin(self, uuid: UUID) -> MojankResult[Skin]:
        """Fetch and decode a player's skin from their uuid."""
        return _decode_skin(await self.uuid_to_profile(uuid))

    def _chunk_result(
        self, outcome: MojankResult[list[SimpleProfile]] | BaseException
    ) -> MojankResult[list[SimpleProfile]]:
        """Turn an exception raised by one chunk into an inconclusive failure."""
        if isinstance(outcome, MojankResult):
            return outcome
        if not isinstance(outcome, Exception):
            raise outcome
        self._log.warning("bulk_chunk_failed", error=repr(outcome))
        return MojankResult.failure("Failed to look up chunk", False, outcome)

    async def _bulk_chunk(self, usernames: list[str]) -> MojankResult[list[SimpleProfile]]:
        if len(usernames) > self.config.bulk_chunk_size:
            raise ValueError(f"Cannot request more than {self.config.bulk_chunk_size} usernames at a time")
        if not usernames:
            return MojankResult.success([])

        def check_count(profiles: list[SimpleProfile]) -> MojankResult[list[SimpleProfile]]:
            if not profiles:
                return MojankResult.failure(UNRESOLVED_NAMES, True)
            if len(profiles) != len(usernames):
                return MojankResult.partial(profiles, UNRESOLVED_NAMES, True)
            return MojankResult.success(profiles)

        return await self._request(
            NO_PROFILES_FOR_NAMES,
            lambda: self.fetcher.post_bulk_simple_profiles(usernames),
            list[SimpleProfile],
            handler=check_count,
        )

    async def _request(
        self,
        invalid: str,
        send: Callable[[], Awaitable[RawResponse]],
        type_: Any,
        handler: Callable[[Any], MojankResult[Any]] = MojankResult.success,
    ) -> MojankResult[Any]:
        """
        Issue a request and classify the response.

        Args:
            invalid: Reason used when the lookup found nothing
            send: Issues the request
            type_: Type to decode a successful body into
            handler: Builds the result from the decoded body

        Returns:
            The classified MojankResult
        """
        try:
            response = await send()
            if response.is_no_content:
                return MojankResult.failure(invalid, True)
            # The service sometimes answers with an HTML page or nothing at all while it is down
            if not response.is_json or response.is_empty:
                self._log.warning(
                    "service_unavailable",
                    status=response.status_code,
                    content_type=response.content_type,
                )
                return MojankResult.failure(SERVICE_UNAVAILABLE, False)
            if response.status_code == 200:
                return handler(response.decode(type_))
            error = response.decode(ApiError)
            return MojankResult.failure(error.error_message, True)
        except DecodeError as e:
            self._log.warning("lookup_failed", reason="decode", error=str(e))
            return MojankResult.failure("Failed to decode response body", False, e)
        except AddressResolutionError as e:
            self._log.warning("lookup_failed", reason="address", error=str(e))
            return MojankResult.failure("Failed to resolve address", False, e)
        except FetchError as e:
            self._log.warning("lookup_failed", reason="transport", error=str(e))
            return MojankResult.failure("Failed to reach service", False, e)


def _decode_skin(result: MojankResult[Profile]) -> MojankResult[Skin]:
    """Map a profile result to its skin, failing conclusively on bad textures."""
    try:
        return result.map(Profile.get_skin)
    except (PropertyNotFoundError, DecodeError) as e:
        return MojankResult.failure(str(e), True, e)
