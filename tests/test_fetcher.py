"""Unit tests for the httpx fetcher - mocked transport, no internet."""

import json
import socket
from uuid import UUID

import httpx
import pytest

from fakes import load_fixture
from mojank.core.endpoints import Endpoints
from mojank.core.fetcher import HttpxFetcher, RawResponse
from mojank.exceptions import AddressResolutionError, DecodeError, FetchError
from mojank.models.profile import Profile, SimpleProfile

NOTCH_UUID = UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")


def make_fetcher(handler, endpoints: Endpoints = Endpoints.DEFAULT) -> HttpxFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxFetcher(endpoints, client=client)


class TestRawResponse:
    """Test response helpers."""

    def test_is_json_with_charset(self):
        assert RawResponse(200, "application/json; charset=utf-8", b"{}").is_json

    def test_html_is_not_json(self):
        assert not RawResponse(502, "text/html", b"<html>").is_json

    def test_missing_content_type(self):
        assert not RawResponse(204).is_json

    def test_no_content_is_empty(self):
        assert RawResponse(204).is_empty
        assert RawResponse(200, "application/json", b"  ").is_empty
        assert not RawResponse(200, "application/json", b"[]").is_empty

    def test_is_no_content(self):
        assert RawResponse(204).is_no_content
        assert RawResponse(200, None, b"").is_no_content
        assert RawResponse(404, None, b"").is_no_content
        assert not RawResponse(200, "application/json", b"[]").is_no_content

    @pytest.mark.parametrize("status", [429, 500, 502, 503])
    def test_blank_error_status_is_not_no_content(self, status):
        response = RawResponse(status, None, b"")
        assert response.is_empty
        assert not response.is_no_content

    def test_decode_model(self):
        response = RawResponse(200, "application/json", load_fixture("notch_simple.json").encode())
        assert response.decode(SimpleProfile).id == NOTCH_UUID

    def test_decode_list(self):
        body = json.dumps([{"id": NOTCH_UUID.hex, "name": "Notch"}]).encode()
        profiles = RawResponse(200, "application/json", body).decode(list[SimpleProfile])
        assert [p.name for p in profiles] == ["Notch"]

    def test_decode_invalid_json(self):
        with pytest.raises(DecodeError):
            RawResponse(200, "application/json", b"{not json").decode(SimpleProfile)

    def test_decode_wrong_shape(self):
        with pytest.raises(DecodeError):
            RawResponse(200, "application/json", b'{"name": "Notch"}').decode(SimpleProfile)


class TestHttpxFetcherRequests:
    """Test that requests hit the configured endpoints."""

    @pytest.mark.asyncio
    async def test_get_simple_profile(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": NOTCH_UUID.hex, "name": "Notch"})

        async with make_fetcher(handler) as fetcher:
            response = await fetcher.get_simple_profile("Notch")

        assert str(seen[0].url) == "https://api.mojang.com/users/profiles/minecraft/Notch"
        assert seen[0].method == "GET"
        assert response.status_code == 200
        assert response.is_json
        assert response.decode(SimpleProfile).name == "Notch"

    @pytest.mark.asyncio
    async def test_get_full_profile(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                content=load_fixture("notch_profile.json"),
                headers={"content-type": "application/json"},
            )

        async with make_fetcher(handler) as fetcher:
            response = await fetcher.get_full_profile(NOTCH_UUID)

        assert seen[0].url.host == "sessionserver.mojang.com"
        assert seen[0].url.params["unsigned"] == "false"
        assert response.decode(Profile).name == "Notch"

    @pytest.mark.asyncio
    async def test_post_bulk(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with make_fetcher(handler) as fetcher:
            await fetcher.post_bulk_simple_profiles(["Notch", "jeb_"])

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == Endpoints.DEFAULT.bulk_url()
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == ["Notch", "jeb_"]

    @pytest.mark.asyncio
    async def test_post_bulk_rejects_large_batches(self):
        async with make_fetcher(lambda r: httpx.Response(200, json=[])) as fetcher:
            with pytest.raises(ValueError):
                await fetcher.post_bulk_simple_profiles([f"user{i}" for i in range(11)])

    @pytest.mark.asyncio
    async def test_alternate_endpoints(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(404, json={"path": "/", "errorMessage": "nope"})

        async with make_fetcher(handler, Endpoints.ALTERNATE) as fetcher:
            response = await fetcher.get_simple_profile("Notch")

        assert seen[0].url.host == "api.minecraftservices.com"
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_no_content(self):
        async with make_fetcher(lambda r: httpx.Response(204)) as fetcher:
            response = await fetcher.get_simple_profile("!<=>!")
        assert response.is_empty


class TestHttpxFetcherErrors:
    """Test transport error mapping."""

    @pytest.mark.asyncio
    async def test_dns_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known") from socket.gaierror(
                -2, "Name or service not known"
            )

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(AddressResolutionError):
                await fetcher.get_simple_profile("Notch")

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(FetchError) as exc_info:
                await fetcher.get_simple_profile("Notch")
        assert not isinstance(exc_info.value, AddressResolutionError)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(FetchError):
                await fetcher.get_full_profile(NOTCH_UUID)


class TestHttpxFetcherLifecycle:
    @pytest.mark.asyncio
    async def test_external_client_left_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        fetcher = HttpxFetcher(Endpoints.DEFAULT, client=client)
        await fetcher.close()
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        fetcher = HttpxFetcher(Endpoints.DEFAULT)
        client = fetcher._get_client()
        await fetcher.close()
        assert client.is_closed
