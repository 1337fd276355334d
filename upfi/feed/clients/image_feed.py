"""Cursor-based infinite pagination over the image feed.

Architecture:
    ``ImageFeed`` owns one logical feed: the ordered pages fetched so far, the
    cursor for the next page and the loading/error/exhausted state. Fetches go
    through the shared ``FetchCoordinator`` so parallel triggers for the same
    page collapse into one request, and results land in the ``QueryCache``.

Design Decisions:
    - Status guards: every transition checks and sets ``status`` without an
      await in between, so two "load more" taps cannot both start a fetch
    - Generation stamp: each ``load_first`` bumps ``generation``; a settle from
      an older generation is dropped instead of overwriting newer pages
    - Non-destructive "load more" errors: ``next_error`` is recorded while the
      pages already shown stay untouched
    - Snapshots: observers receive frozen ``FeedState`` values

Query Keys:
    - First page: ``(name,)``
    - Later pages: ``(name, {"after": cursor})``
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..cache import FetchCoordinator
from ..config import FEED_QUERY_NAME, IMAGES_PATH
from ..core.enums import FeedStatus
from ..core.exceptions import ServerError, StaleResultDiscarded
from ..core.keys import QueryKey
from ..models import FeedState, Image, ImagePageResponse, Page
from ..runtime.rest import FetchClient
from ..utils.observers import Observer, ObserverSet

logger = logging.getLogger(__name__)


class ImageFeed:
    """Paginated image feed backed by the query cache."""

    def __init__(
        self,
        client: FetchClient,
        coordinator: FetchCoordinator,
        *,
        name: str = FEED_QUERY_NAME,
        path: str = IMAGES_PATH,
    ) -> None:
        self._client = client
        self._coordinator = coordinator
        self._name = name
        self._path = path
        self._state = FeedState()
        self._observers: ObserverSet[FeedState] = ObserverSet("feed")

    # ----------------------
    # Read access
    # ----------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def items(self) -> list[Image]:
        return self._state.flat_items

    @property
    def has_next_page(self) -> bool | None:
        return self._state.has_next_page

    def first_page_key(self) -> QueryKey:
        return QueryKey.of(self._name)

    def page_key(self, cursor: str | None) -> QueryKey:
        if cursor is None:
            return self.first_page_key()
        return QueryKey.of(self._name, {"after": cursor})

    # ----------------------
    # Loading
    # ----------------------
    async def load_first(self, *, force: bool = False) -> FeedState:
        """Load (or reload) the first page, replacing every page shown.

        A no-op while the feed is READY and its first page is still fresh,
        unless ``force`` is set. Issuing it while another first-page load is
        pending supersedes that load.
        """
        key = self.first_page_key()
        cache = self._coordinator.cache
        if self._state.status == FeedStatus.READY and not force and not cache.is_stale(key):
            return self._state

        generation = self._state.generation + 1
        self._set(
            status=FeedStatus.LOADING_FIRST,
            generation=generation,
            is_fetching_next=False,
            error=None,
            next_error=None,
        )
        logger.debug("Loading first page", extra={"feed": self._name, "generation": generation})

        try:
            page = await self._load(key, None, force=force)
            self._check_generation(key, generation)
        except StaleResultDiscarded as e:
            logger.debug(str(e))
            return self._state
        except asyncio.CancelledError:
            if generation == self._state.generation:
                self._set(status=FeedStatus.READY if self._state.pages else FeedStatus.IDLE)
            raise
        except Exception as e:
            if generation != self._state.generation:
                logger.debug(str(StaleResultDiscarded(key, generation)))
                return self._state
            logger.debug("First page failed", extra={"feed": self._name, "error": str(e)})
            self._set(status=FeedStatus.ERROR, error=e)
            return self._state

        self._set(pages=(page,), status=FeedStatus.READY, error=None)
        return self._state

    async def load_next(self) -> FeedState:
        """Fetch the page after the last cursor and append it.

        A no-op unless the feed is READY, a cursor remains and no other
        "load more" is pending.
        """
        state = self._state
        if state.status != FeedStatus.READY or state.is_fetching_next or not state.has_next_page:
            return state

        cursor = state.next_cursor
        key = self.page_key(cursor)
        generation = state.generation
        self._set(status=FeedStatus.LOADING_MORE, is_fetching_next=True, next_error=None)
        logger.debug("Loading next page", extra={"feed": self._name, "cursor": cursor})

        try:
            page = await self._load(key, cursor)
            self._check_generation(key, generation)
        except StaleResultDiscarded as e:
            logger.debug(str(e))
            return self._state
        except asyncio.CancelledError:
            if generation == self._state.generation:
                self._set(status=FeedStatus.READY, is_fetching_next=False)
            raise
        except Exception as e:
            if generation != self._state.generation:
                logger.debug(str(StaleResultDiscarded(key, generation)))
                return self._state
            logger.debug("Next page failed", extra={"feed": self._name, "error": str(e)})
            self._set(status=FeedStatus.READY, is_fetching_next=False, next_error=e)
            return self._state

        # A first page re-fetched after an upload can shift items across the
        # page boundary; keep only ids not shown yet.
        seen = (item.id for item in self._state.flat_items)
        self._set(
            pages=self._state.pages + (page.without_ids(seen),),
            status=FeedStatus.READY,
            is_fetching_next=False,
        )
        return self._state

    # ----------------------
    # Subscriptions
    # ----------------------
    def subscribe(self, callback: Observer[FeedState]) -> str:
        """Receive a ``FeedState`` snapshot on every transition."""
        return self._observers.subscribe(callback)

    def unsubscribe(self, subscription_id: str) -> None:
        self._observers.unsubscribe(subscription_id)

    # ----------------------
    # Internals
    # ----------------------
    async def _load(self, key: QueryKey, cursor: str | None, *, force: bool = False) -> Page:
        cache = self._coordinator.cache
        entry = cache.read(key)
        if (
            not force
            and entry is not None
            and not cache.is_stale(key)
            and not self._coordinator.is_in_flight(key)
        ):
            logger.debug("Serving page from cache", extra={"key": repr(key)})
            return entry.value
        return await self._coordinator.request(key, lambda: self._fetch_page(cursor))

    async def _fetch_page(self, cursor: str | None) -> Page:
        response = await self._client.get(self._path, params={"after": cursor})
        return self._parse_page(response.body)

    def _parse_page(self, body: Any) -> Page:
        try:
            return ImagePageResponse.model_validate(body).to_page()
        except PydanticValidationError as e:
            raise ServerError(f"Malformed page from {self._path}", body=body) from e

    def _check_generation(self, key: QueryKey, generation: int) -> None:
        if generation != self._state.generation:
            raise StaleResultDiscarded(key, generation)

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        self._observers.notify(self._state)
