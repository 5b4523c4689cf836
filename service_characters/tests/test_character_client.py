"""
Unit tests for the upstream character API client.
"""

import httpx
import pytest

from service_characters.app.adapters.character_client import CharacterApiClient
from shared.errors import NotFoundError, UpstreamServiceError
from shared.test_helpers import TestDataFactory


BASE_URL = "https://characters.test/api"


def make_client(handler, timeout: float = 10.0) -> CharacterApiClient:
    return CharacterApiClient(BASE_URL, timeout=timeout, transport=httpx.MockTransport(handler))


class TestCharacterApiClient:
    """Test cases for CharacterApiClient."""

    @pytest.mark.asyncio
    async def test_list_characters(self):
        page = TestDataFactory.create_character_page()
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=page)

        client = make_client(handler)
        try:
            data = await client.list_characters()
        finally:
            await client.close()

        assert data == page
        assert str(seen[0]) == f"{BASE_URL}/character"

    @pytest.mark.asyncio
    async def test_get_character(self):
        rick = TestDataFactory.create_test_characters()[0]

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/character/1"
            return httpx.Response(200, json=rick)

        client = make_client(handler)
        try:
            assert await client.get_character("1") == rick
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_get_character_not_found_names_the_id(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "Character not found"})

        client = make_client(handler)
        try:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get_character("999")
        finally:
            await client.close()

        assert exc_info.value.message == "Character with ID 999 not found"
        assert exc_info.value.details == {"id": "999"}
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_search_sends_name_as_query_parameter(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["path"] = request.url.path
            captured["name"] = request.url.params.get("name")
            return httpx.Response(200, json=TestDataFactory.create_character_page())

        client = make_client(handler)
        try:
            await client.search_characters("Rick Sanchez")
        finally:
            await client.close()

        assert captured == {"path": "/api/character/", "name": "Rick Sanchez"}

    @pytest.mark.asyncio
    async def test_search_not_found_names_the_query(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "There is nothing here"})

        client = make_client(handler)
        try:
            with pytest.raises(NotFoundError) as exc_info:
                await client.search_characters("Xyzzy")
        finally:
            await client.close()

        assert exc_info.value.message == 'No characters found with name "Xyzzy"'

    @pytest.mark.asyncio
    async def test_unexpected_status_is_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="maintenance")

        client = make_client(handler)
        try:
            with pytest.raises(UpstreamServiceError) as exc_info:
                await client.list_characters()
        finally:
            await client.close()

        assert exc_info.value.code == "UPSTREAM_ERROR"
        assert "503" in exc_info.value.message
        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_timeout_is_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler, timeout=2.5)
        try:
            with pytest.raises(UpstreamServiceError) as exc_info:
                await client.get_character("1")
        finally:
            await client.close()

        assert "timed out after 2.5s" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_error_is_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        client = make_client(handler)
        try:
            with pytest.raises(UpstreamServiceError) as exc_info:
                await client.list_characters()
        finally:
            await client.close()

        assert "name resolution failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json_is_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        client = make_client(handler)
        try:
            with pytest.raises(UpstreamServiceError):
                await client.list_characters()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_client_applies_configured_timeout(self):
        client = make_client(lambda request: httpx.Response(200, json={}), timeout=3.0)
        try:
            http_client = client._get_client()
            assert http_client.timeout.read == 3.0
            assert http_client.timeout.connect == 3.0
        finally:
            await client.close()
