"""Fetch client used by the feed and the upload mutation."""

from __future__ import annotations

from typing import Any

from .http_client import FetchResponse, HTTPClient, ResponseHook


class FetchClient:
    """Thin path-based wrapper over ``HTTPClient``.

    One call, one request: no caching, no de-duplication, no retry. Those are
    the cache layer's concern.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http: HTTPClient | None = None,
    ) -> None:
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout)

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._http.add_response_hook(hook)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> FetchResponse:
        return await self._http.get(path, params=params, headers=None)

    async def post(self, path: str, body: Any = None) -> FetchResponse:
        return await self._http.post(path, json=body, headers=None)

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> FetchClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
