"""Endpoint templates for the Mojang identity API."""

from dataclasses import dataclass, replace
from typing import ClassVar
from urllib.parse import quote
from uuid import UUID

from mojank.exceptions import ConfigError


@dataclass(frozen=True)
class Endpoints:
    """
    URL templates the fetcher targets.

    Templates use ``{uuid}`` and ``{username}`` placeholders. Swap in a
    different set when the default hosts are unavailable.
    """

    uuid_to_profile: str
    username_to_simple_profile: str
    username_to_simple_profile_bulk: str

    DEFAULT: ClassVar["Endpoints"]
    ALTERNATE: ClassVar["Endpoints"]

    def __post_init__(self) -> None:
        if "{uuid}" not in self.uuid_to_profile:
            raise ConfigError(f"uuid_to_profile template lacks {{uuid}}: {self.uuid_to_profile}")
        if "{username}" not in self.username_to_simple_profile:
            raise ConfigError(
                f"username_to_simple_profile template lacks {{username}}: {self.username_to_simple_profile}"
            )

    def profile_url(self, uuid: UUID) -> str:
        """Full profile URL for a uuid."""
        return self.uuid_to_profile.format(uuid=uuid)

    def simple_profile_url(self, username: str) -> str:
        """Simple profile URL for a username."""
        return self.username_to_simple_profile.format(username=quote(username, safe=""))

    def bulk_url(self) -> str:
        return self.username_to_simple_profile_bulk

    def with_overrides(
        self,
        uuid_to_profile: str | None = None,
        username_to_simple_profile: str | None = None,
        username_to_simple_profile_bulk: str | None = None,
    ) -> "Endpoints":
        """Copy with any non-None template replaced."""
        changes = {
            "uuid_to_profile": uuid_to_profile,
            "username_to_simple_profile": username_to_simple_profile,
            "username_to_simple_profile_bulk": username_to_simple_profile_bulk,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


Endpoints.DEFAULT = Endpoints(
    uuid_to_profile="https://sessionserver.mojang.com/session/minecraft/profile/{uuid}?unsigned=false",
    username_to_simple_profile="https://api.mojang.com/users/profiles/minecraft/{username}",
    username_to_simple_profile_bulk="https://api.minecraftservices.com/minecraft/profile/lookup/bulk/byname",
)

Endpoints.ALTERNATE = Endpoints.DEFAULT.with_overrides(
    username_to_simple_profile="https://api.minecraftservices.com/minecraft/profile/lookup/name/{username}",
)
