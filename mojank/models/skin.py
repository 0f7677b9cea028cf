"""Skin data decoded from the textures property."""

from pydantic import BaseModel, ConfigDict, Field

from mojank.models.types import PlayerUUID


class SkinMetadata(BaseModel):
    """Whether the skin renders in the 'classic' or 'slim' style."""

    model_config = ConfigDict(frozen=True)

    model: str = "classic"


class SkinTexture(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    metadata: SkinMetadata = SkinMetadata()

    @property
    def is_slim(self) -> bool:
        return self.metadata.model == "slim"


class CapeTexture(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class Textures(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skin: SkinTexture = Field(alias="SKIN")
    cape: CapeTexture | None = Field(default=None, alias="CAPE")


class Skin(BaseModel):
    """A player's skin, see ``Profile.get_skin``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: int  # epoch millis when the property was generated
    profile_id: PlayerUUID = Field(alias="profileId")
    profile_name: str = Field(alias="profileName")
    signature_required: bool = Field(default=False, alias="signatureRequired")
    textures: Textures
