"""HTTP fetchers for the identity API."""

import json
import socket
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar
from uuid import UUID

import httpx
from pydantic import TypeAdapter, ValidationError

from mojank.config import MAX_BULK_CHUNK_SIZE, MojankConfig
from mojank.core.endpoints import Endpoints
from mojank.exceptions import AddressResolutionError, DecodeError, FetchError

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


@dataclass
class RawResponse:
    """Undecoded response of a single API call."""

    status_code: int
    content_type: str | None = None
    content: bytes = b""

    @property
    def is_json(self) -> bool:
        """Whether the body is JSON. The API serves HTML pages when it is down."""
        if self.content_type is None:
            return False
        return self.content_type.split(";")[0].strip().lower() == JSON_CONTENT_TYPE

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    @property
    def is_no_content(self) -> bool:
        """
        Whether the API answered that nothing matched the lookup.

        Only 204, or a blank body on a 2xx or 404, means that. A blank body
        on any other status comes from a proxy in front of a failing service.
        """
        if self.status_code == httpx.codes.NO_CONTENT:
            return True
        if not self.is_empty:
            return False
        return httpx.codes.is_success(self.status_code) or self.status_code == httpx.codes.NOT_FOUND

    def decode(self, type_: Any) -> Any:
        """
        Decode the JSON body into ``type_``.

        Args:
            type_: A pydantic model or any type TypeAdapter accepts

        Returns:
            The validated value

        Raises:
            DecodeError: If the body is not valid JSON for ``type_``
        """
        try:
            return TypeAdapter(type_).validate_json(self.content)
        except ValidationError as e:
            raise DecodeError(f"Failed to decode body as {type_}: {e}") from e


class Fetcher(ABC):
    """
    Performs one request per call and returns the raw response.

    Implementations raise FetchError (or AddressResolutionError) when the
    service cannot be reached; status and content classification is left
    to the caller.
    """

    @abstractmethod
    async def get_simple_profile(self, username: str) -> RawResponse:
        """GET the simple profile for a username."""
        ...

    @abstractmethod
    async def get_full_profile(self, uuid: UUID) -> RawResponse:
        """GET the full profile for a uuid."""
        ...

    @abstractmethod
    async def post_bulk_simple_profiles(self, usernames: Sequence[str]) -> RawResponse:
        """POST up to ten usernames to the bulk lookup."""
        ...

    async def close(self) -> None:
        """Release connections."""

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _is_address_error(error: httpx.ConnectError) -> bool:
    """Walk the cause chain looking for a DNS failure."""
    cause: BaseException | None = error
    while cause is not None:
        if isinstance(cause, socket.gaierror):
            return True
        cause = cause.__cause__ or cause.__context__
    return False


class HttpxFetcher(Fetcher):
    """
    Fetcher backed by a shared httpx.AsyncClient.

    Example:
        async with HttpxFetcher(Endpoints.DEFAULT) as fetcher:
            response = await fetcher.get_simple_profile("Notch")
    """

    def __init__(
        self,
        endpoints: Endpoints | None = None,
        config: MojankConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize fetcher.

        Args:
            endpoints: URL templates, resolved from config if None
            config: MojankConfig instance, uses defaults if None
            client: Pre-built client, e.g. with a mock transport
        """
        self.config = config or MojankConfig()
        self.endpoints = endpoints or self.config.build_endpoints()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout_seconds),
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": JSON_CONTENT_TYPE,
                },
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> RawResponse:
        client = self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.ConnectError as e:
            if _is_address_error(e):
                raise AddressResolutionError(f"Failed to resolve address for {url}: {e}") from e
            raise FetchError(f"Connection failed for {url}: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"HTTP error for {url}: {e}") from e

        return RawResponse(
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            content=response.content,
        )

    async def get_simple_profile(self, username: str) -> RawResponse:
        return await self._request("GET", self.endpoints.simple_profile_url(username))

    async def get_full_profile(self, uuid: UUID) -> RawResponse:
        return await self._request("GET", self.endpoints.profile_url(uuid))

    async def post_bulk_simple_profiles(self, usernames: Sequence[str]) -> RawResponse:
        if len(usernames) > MAX_BULK_CHUNK_SIZE:
            raise ValueError(f"Cannot request more than {MAX_BULK_CHUNK_SIZE} usernames at a time")
        return await self._request(
            "POST",
            self.endpoints.bulk_url(),
            content=json.dumps(list(usernames)),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
