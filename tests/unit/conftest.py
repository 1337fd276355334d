"""Shared fakes for unit tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from upfi.feed.runtime.rest import FetchResponse


def image_payload(image_id: str, ts: float = 1.0) -> dict[str, Any]:
    return {
        "id": image_id,
        "title": f"Image {image_id}",
        "description": f"Description of {image_id}",
        "url": f"https://cdn.example.com/{image_id}.png",
        "ts": ts,
    }


def page_body(ids: list[str], after: str | None) -> dict[str, Any]:
    return {"data": [image_payload(i) for i in ids], "after": after}


class FakeFetchClient:
    """In-memory stand-in for FetchClient.

    GET responses are keyed by the ``after`` cursor (None for the first page).
    A queued list is consumed one response per call; an Exception is raised.
    ``hold(cursor)`` makes matching requests wait until ``release(cursor)``.
    """

    def __init__(self) -> None:
        self.pages: dict[str | None, list[Any]] = {}
        self.post_results: list[Any] = []
        self.get_calls: list[tuple[str, dict[str, Any] | None]] = []
        self.post_calls: list[tuple[str, Any]] = []
        self._gates: dict[str | None, asyncio.Event] = {}
        self.closed = False

    def queue_page(self, cursor: str | None, *responses: Any) -> None:
        self.pages.setdefault(cursor, []).extend(responses)

    def queue_post(self, *responses: Any) -> None:
        self.post_results.extend(responses)

    def hold(self, cursor: str | None) -> None:
        self._gates[cursor] = asyncio.Event()

    def release(self, cursor: str | None) -> None:
        self._gates.pop(cursor).set()

    def calls_for(self, cursor: str | None) -> int:
        return sum(1 for _, params in self.get_calls if (params or {}).get("after") == cursor)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> FetchResponse:
        self.get_calls.append((path, params))
        cursor = (params or {}).get("after")
        gate = self._gates.get(cursor)
        if gate is not None:
            await gate.wait()
        queued = self.pages.get(cursor)
        if not queued:
            raise AssertionError(f"No response queued for cursor {cursor!r}")
        result = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(result, Exception):
            raise result
        return FetchResponse(status=200, body=result)

    async def post(self, path: str, body: Any = None) -> FetchResponse:
        self.post_calls.append((path, body))
        if not self.post_results:
            raise AssertionError("No POST response queued")
        result = self.post_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return FetchResponse(status=201, body=result)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeFetchClient:
    return FakeFetchClient()


@pytest.fixture(name="page_body")
def page_body_fixture():
    return page_body


@pytest.fixture(name="image_payload")
def image_payload_fixture():
    return image_payload
