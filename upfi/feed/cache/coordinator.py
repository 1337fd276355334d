"""Single-flight fetch coordination on top of the query cache.

Concurrent requests for the same key share one loader call: the first caller
starts an ``asyncio.Task`` and later callers await it. The in-flight entry is
removed inside the task, before its result is published, so any request made
after settlement starts a fresh fetch.

Each fetch records the cache epoch of its key when it starts. If the key is
invalidated meanwhile, new callers get a fresh fetch instead of joining, and
the outdated result is stored as stale. A fetch superseded this way never
writes over the newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, NamedTuple

from ..core.keys import QueryKey
from .query_cache import QueryCache

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


class _Flight(NamedTuple):
    task: asyncio.Task[Any]
    epoch: int


def _consume_outcome(task: asyncio.Task[Any]) -> None:
    # Marks the exception retrieved even when every waiter was cancelled.
    if not task.cancelled():
        task.exception()


class FetchCoordinator:
    """De-duplicates concurrent fetches and records their outcome in the cache."""

    def __init__(self, cache: QueryCache) -> None:
        self._cache = cache
        self._in_flight: dict[QueryKey, _Flight] = {}

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    def is_in_flight(self, key: QueryKey) -> bool:
        return key in self._in_flight

    async def request(self, key: QueryKey, loader: Loader) -> Any:
        """Run ``loader`` for ``key`` unless a current fetch for it is running.

        Every concurrent caller gets the same result, or the same exception.
        Nothing is retried.
        """
        flight = self._in_flight.get(key)
        if flight is not None and flight.epoch != self._cache.epoch(key):
            logger.debug("In-flight fetch invalidated, refetching", extra={"key": repr(key)})
            flight = None
        if flight is None:
            self._cache.mark_loading(key)
            epoch = self._cache.epoch(key)
            task = asyncio.get_running_loop().create_task(self._run(key, epoch, loader))
            flight = self._in_flight[key] = _Flight(task, epoch)
            task.add_done_callback(_consume_outcome)
            logger.debug("Fetch started", extra={"key": repr(key)})
        else:
            logger.debug("Joined in-flight fetch", extra={"key": repr(key)})
        # A cancelled waiter must not cancel the fetch other callers share.
        return await asyncio.shield(flight.task)

    def _release(self, key: QueryKey) -> bool:
        """Drop the in-flight entry if it belongs to the running task."""
        flight = self._in_flight.get(key)
        if flight is None or flight.task is not asyncio.current_task():
            return False
        del self._in_flight[key]
        return True

    async def _run(self, key: QueryKey, epoch: int, loader: Loader) -> Any:
        try:
            result = await loader()
        except asyncio.CancelledError:
            self._release(key)
            raise
        except Exception as e:
            if self._release(key):
                self._cache.fail(key, e)
            logger.debug("Fetch failed", extra={"key": repr(key), "error": str(e)})
            raise
        if not self._release(key):
            logger.debug("Superseded fetch settled", extra={"key": repr(key)})
            return result
        invalidated = epoch != self._cache.epoch(key)
        self._cache.write(key, result, stale=invalidated)
        logger.debug("Fetch settled", extra={"key": repr(key), "stale": invalidated})
        return result
