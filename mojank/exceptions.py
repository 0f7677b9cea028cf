"""Custom exception hierarchy for mojank."""


class MojankError(Exception):
    """Base exception for all mojank errors."""


class InvalidStateError(MojankError):
    """Accessed a field the result variant does not carry."""


class FetchError(MojankError):
    """Failed to reach the identity service."""


class AddressResolutionError(FetchError):
    """Could not resolve the service host."""


class DecodeError(MojankError):
    """Response body did not match the expected shape."""


class PropertyNotFoundError(MojankError):
    """Profile does not carry the requested property."""


class ConfigError(MojankError):
    """Invalid configuration."""
