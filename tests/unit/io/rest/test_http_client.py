"""Precise unit tests for HTTPClient.

Tests focus on session management, error mapping and response hooks.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from upfi.feed.core import NetworkError, ServerError
from upfi.feed.runtime.rest import FetchResponse, HTTPClient


def mock_response(status: int = 200, body=None, json_error: Exception | None = None):
    response = AsyncMock()
    response.status = status
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=body)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def client_with(response=None, error: Exception | None = None) -> tuple[HTTPClient, MagicMock]:
    client = HTTPClient(base_url="https://api.example.com")
    session = MagicMock()
    session.closed = False
    if error is not None:
        session.get = MagicMock(side_effect=error)
        session.post = MagicMock(side_effect=error)
    else:
        session.get = MagicMock(return_value=response)
        session.post = MagicMock(return_value=response)
    client._session = session
    return client, session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(base_url="https://api.example.com/", timeout=10.0)
        assert client.timeout.total == 10.0
        assert client.base_url == "https://api.example.com"
        assert client._session is None
        assert client._response_hooks == []

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None
        assert client._session is None or client._session.closed


class TestHTTPClientRequests:
    """Test request building and response decoding."""

    @pytest.mark.asyncio
    async def test_get_joins_base_url_and_drops_none_params(self):
        client, session = client_with(mock_response(body={"data": [], "after": None}))

        result = await client.get("/api/images", params={"after": None})

        assert result == FetchResponse(status=200, body={"data": [], "after": None})
        session.get.assert_called_once_with(
            "https://api.example.com/api/images", params=None, headers=None
        )

    @pytest.mark.asyncio
    async def test_get_forwards_cursor(self):
        client, session = client_with(mock_response(body={}))
        await client.get("/api/images", params={"after": "c1"})
        session.get.assert_called_once_with(
            "https://api.example.com/api/images", params={"after": "c1"}, headers=None
        )

    @pytest.mark.asyncio
    async def test_absolute_url_is_not_prefixed(self):
        client, session = client_with(mock_response(body={}))
        await client.get("https://other.example.com/x")
        assert session.get.call_args.args[0] == "https://other.example.com/x"

    @pytest.mark.asyncio
    async def test_post_sends_json(self):
        client, session = client_with(mock_response(status=201, body={"image": {}}))

        result = await client.post("/api/images", json={"title": "t"})

        assert result.status == 201
        assert result.ok
        session.post.assert_called_once_with(
            "https://api.example.com/api/images", json={"title": "t"}, headers=None
        )


class TestHTTPClientErrors:
    """Test mapping of failures onto the error taxonomy."""

    @pytest.mark.asyncio
    async def test_non_2xx_raises_server_error(self):
        client, _ = client_with(mock_response(status=503, body={"message": "down"}))

        with pytest.raises(ServerError) as exc_info:
            await client.get("/api/images")

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == {"message": "down"}

    @pytest.mark.asyncio
    async def test_error_response_with_undecodable_body(self):
        response = mock_response(status=500, json_error=json.JSONDecodeError("x", "", 0))
        client, _ = client_with(response)

        with pytest.raises(ServerError) as exc_info:
            await client.get("/api/images")

        assert exc_info.value.body is None

    @pytest.mark.asyncio
    async def test_success_with_undecodable_body(self):
        response = mock_response(status=200, json_error=json.JSONDecodeError("x", "", 0))
        client, _ = client_with(response)

        with pytest.raises(ServerError):
            await client.get("/api/images")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
    )
    async def test_transport_failure_raises_network_error(self, error):
        client, _ = client_with(error=error)

        with pytest.raises(NetworkError):
            await client.get("/api/images")


class TestHTTPClientResponseHooks:
    """Test HTTPClient response hooks."""

    @pytest.mark.asyncio
    async def test_response_hook_called(self):
        response = mock_response(body={})
        client, _ = client_with(response)
        hook = MagicMock(return_value=None)
        client.add_response_hook(hook)

        await client.get("/api/images")

        hook.assert_called_once_with(response)

    @pytest.mark.asyncio
    async def test_async_response_hook_awaited(self):
        client, _ = client_with(mock_response(body={}))
        seen = []

        async def hook(response):
            seen.append(response.status)

        client.add_response_hook(hook)
        await client.get("/api/images")
        assert seen == [200]

    @pytest.mark.asyncio
    async def test_response_hook_exception_handled(self):
        client, _ = client_with(mock_response(body={"data": "test"}))

        def failing_hook(response):
            raise Exception("Hook error")

        client.add_response_hook(failing_hook)

        result = await client.get("/api/images")
        assert result.body == {"data": "test"}
