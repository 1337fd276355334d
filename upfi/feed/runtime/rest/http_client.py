"""HTTP client helper."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import aiohttp

from ...core.exceptions import NetworkError, ServerError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], Awaitable[None] | None]


@dataclass(frozen=True)
class FetchResponse:
    """Decoded response of a single request."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPClient:
    """Async HTTP client wrapper.

    Maps aiohttp failures onto the library's error taxonomy: transport
    problems raise ``NetworkError``, non-2xx responses and undecodable success
    bodies raise ``ServerError``. Requests are never retried.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a callable invoked with every raw response."""
        self._response_hooks.append(hook)

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        """GET request."""
        return await self._send("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        """POST request with a JSON body."""
        return await self._send("POST", url, json=json, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()

    def _resolve(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        url = self._resolve(url)
        # aiohttp rejects None query values; an absent cursor means "first page".
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            if method == "GET":
                ctx = self.session.get(url, params=params or None, headers=headers)
            else:
                ctx = self.session.post(url, json=json, headers=headers)
            async with ctx as response:
                await self._run_hooks(response)
                status = response.status
                try:
                    body = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as e:
                    if 200 <= status < 300:
                        raise ServerError(
                            f"{method} {url} returned an undecodable body", status_code=status
                        ) from e
                    body = None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug("Transport failure", extra={"method": method, "url": url})
            raise NetworkError(f"{method} {url} failed: {e}") from e

        if not 200 <= status < 300:
            raise ServerError(f"{method} {url} returned HTTP {status}", status_code=status, body=body)
        return FetchResponse(status=status, body=body)

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Response hook failed: {e}", exc_info=True)
