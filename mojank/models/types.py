"""Shared field types."""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator


def parse_uuid(value: Any) -> Any:
    """Accept both the undashed form the API sends and the dashed form."""
    if isinstance(value, UUID) or not isinstance(value, str):
        return value
    try:
        if len(value) == 32:
            return UUID(hex=value)
        if len(value) == 36:
            return UUID(value)
    except ValueError:
        pass
    raise ValueError(f"Invalid uuid provided: {value!r}")


PlayerUUID = Annotated[UUID, BeforeValidator(parse_uuid)]
