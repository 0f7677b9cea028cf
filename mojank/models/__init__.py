"""Pydantic models and the result wrapper for mojank."""

from mojank.models.error import ApiError
from mojank.models.profile import Profile, Property, SimpleProfile
from mojank.models.result import MojankResult, ResultKind
from mojank.models.skin import Skin

__all__ = [
    "ApiError",
    "MojankResult",
    "Profile",
    "Property",
    "ResultKind",
    "SimpleProfile",
    "Skin",
]
