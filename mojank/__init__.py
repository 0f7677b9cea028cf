"""mojank - Mojang player identity API client."""

from mojank.models.profile import Profile, Property, SimpleProfile
from mojank.models.result import MojankResult
from mojank.models.skin import Skin
from mojank.config import MojankConfig
from mojank.core.endpoints import Endpoints
from mojank.core.fetcher import Fetcher, HttpxFetcher, RawResponse
from mojank.core.resolver import Mojank
from mojank.core.cached import CachedMojank

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "Mojank",
    "CachedMojank",
    "MojankConfig",
    "MojankResult",
    # Transport
    "Endpoints",
    "Fetcher",
    "HttpxFetcher",
    "RawResponse",
    # Models
    "SimpleProfile",
    "Profile",
    "Property",
    "Skin",
    "__version__",
]
