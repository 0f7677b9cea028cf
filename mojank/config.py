"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings

from mojank.core.endpoints import Endpoints


class EndpointSet(str, Enum):
    """Built-in endpoint selection."""
    DEFAULT = "default"
    ALTERNATE = "alternate"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


# The bulk endpoint rejects more names than this per request
MAX_BULK_CHUNK_SIZE = 10


class MojankConfig(BaseSettings):
    """Configuration for the mojank client."""

    # Endpoint settings
    endpoints: EndpointSet = EndpointSet.DEFAULT
    uuid_to_profile_url: str | None = None
    username_to_simple_profile_url: str | None = None
    username_to_simple_profile_bulk_url: str | None = None

    # Transport settings
    request_timeout_seconds: float = 10.0
    user_agent: str = "mojank/0.1.0"

    # Retry settings
    max_attempts: int = Field(default=3, ge=1)

    # Bulk settings
    bulk_chunk_size: int = Field(default=MAX_BULK_CHUNK_SIZE, ge=1, le=MAX_BULK_CHUNK_SIZE)

    # Cache settings
    cache_ttl_seconds: int = 1200

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "MOJANK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def build_endpoints(self) -> Endpoints:
        """
        Resolve the effective endpoint templates.

        Returns:
            The selected built-in set with any URL overrides applied

        Raises:
            ConfigError: If an override lacks its placeholder
        """
        base = Endpoints.ALTERNATE if self.endpoints == EndpointSet.ALTERNATE else Endpoints.DEFAULT
        return base.with_overrides(
            uuid_to_profile=self.uuid_to_profile_url,
            username_to_simple_profile=self.username_to_simple_profile_url,
            username_to_simple_profile_bulk=self.username_to_simple_profile_bulk_url,
        )
