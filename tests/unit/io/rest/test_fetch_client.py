"""Precise unit tests for FetchClient.

Tests focus on HTTPClient delegation.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from upfi.feed.runtime.rest import FetchClient, FetchResponse, HTTPClient


class TestFetchClient:
    """Test FetchClient wrapper."""

    def test_init(self):
        client = FetchClient("https://api.example.com", timeout=5.0)
        assert client._http.base_url == "https://api.example.com"
        assert client._http.timeout.total == 5.0

    def test_uses_injected_http_client(self):
        http = HTTPClient(base_url="https://other.example.com")
        assert FetchClient("ignored", http=http)._http is http

    def test_add_response_hook(self):
        client = FetchClient("https://api.example.com")
        hook = MagicMock()
        client.add_response_hook(hook)
        assert hook in client._http._response_hooks

    @pytest.mark.asyncio
    async def test_get_delegates_to_http_client(self):
        client = FetchClient("https://api.example.com")
        expected = FetchResponse(status=200, body={"data": [], "after": None})
        client._http.get = AsyncMock(return_value=expected)

        result = await client.get("/api/images", params={"after": "c1"})

        assert result is expected
        client._http.get.assert_called_once_with(
            "/api/images", params={"after": "c1"}, headers=None
        )

    @pytest.mark.asyncio
    async def test_post_delegates_to_http_client(self):
        client = FetchClient("https://api.example.com")
        client._http.post = AsyncMock(return_value=FetchResponse(status=201, body={}))

        await client.post("/api/images", {"title": "t"})

        client._http.post.assert_called_once_with("/api/images", json={"title": "t"}, headers=None)

    @pytest.mark.asyncio
    async def test_close_delegates_to_http_client(self):
        client = FetchClient("https://api.example.com")
        client._http.close = AsyncMock()

        async with client:
            pass

        client._http.close.assert_called_once()
