"""Player profile models."""

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mojank.exceptions import DecodeError, PropertyNotFoundError
from mojank.models.skin import Skin
from mojank.models.types import PlayerUUID

TEXTURES_PROPERTY = "textures"


class SimpleProfile(BaseModel):
    """Profile returned by the username and bulk-by-name lookups."""

    model_config = ConfigDict(frozen=True)

    id: PlayerUUID
    name: str  # correctly capitalized
    legacy: bool = False  # not yet migrated to a Mojang account
    demo: bool = False  # has not bought the game


class Property(BaseModel):
    """A profile property, usually a base64 encoded payload."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    signature: str | None = None  # None when requested unsigned


class Profile(BaseModel):
    """Full profile returned by the uuid lookup, including skin properties."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: PlayerUUID
    name: str
    properties: list[Property] = Field(default_factory=list)
    profile_actions: list[str] = Field(default_factory=list, alias="profileActions")
    legacy: bool = False

    def get_property(self, name: str) -> Property:
        """
        Find a property by name.

        Raises:
            PropertyNotFoundError: If the profile has no such property
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise PropertyNotFoundError(f"Profile {self.name} has no {name!r} property")

    def get_skin(self) -> Skin:
        """
        Decode the ``textures`` property into a Skin.

        Raises:
            PropertyNotFoundError: If there is no textures property
            DecodeError: If the property is not valid base64 encoded JSON
        """
        prop = self.get_property(TEXTURES_PROPERTY)
        try:
            payload = base64.b64decode(prop.value, validate=True)
            return Skin.model_validate_json(payload)
        except (binascii.Error, ValidationError) as e:
            raise DecodeError(f"Malformed textures property for {self.name}: {e}") from e

    def to_simple(self) -> SimpleProfile:
        """Drop properties and actions."""
        return SimpleProfile(id=self.id, name=self.name, legacy=self.legacy)
