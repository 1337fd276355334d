"""GalleryAPI facade for the UI layer.

Architecture:
    This module implements the Facade pattern over the feed engine. One
    GalleryAPI owns exactly one QueryCache, shared by the paginated feed and
    the upload mutation, and exposes the surface presentation code needs:
    - ``feed_state`` snapshot plus ``load_first`` / ``load_next``
    - ``submit_mutation`` for uploads
    - observers for feed transitions and upload notifications

Design Decisions:
    - Explicit cache instance instead of a process-wide singleton
    - Collaborator injection (client, cache) for testing with fakes
    - Context manager pattern ensures the HTTP session is closed

See Also:
    - ImageFeed: pagination state machine
    - ImageMutation: upload and invalidation
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..cache import FetchCoordinator, QueryCache
from ..clients import ImageFeed, ImageMutation
from ..config import FeedConfig
from ..core.keys import key_prefix
from ..models import FeedState, Image, ImageSubmission, Notification
from ..runtime.rest import FetchClient
from ..utils.observers import Observer

logger = logging.getLogger(__name__)


class GalleryAPI:
    """High-level entry point for the image gallery.

    Example:
        >>> async with GalleryAPI(FeedConfig(base_url="http://localhost:3000")) as api:
        ...     await api.load_first()
        ...     await api.load_next()
        ...     image = await api.submit_mutation(
        ...         {"title": "Sunset", "description": "Beach at dusk", "url": url},
        ...         refetch=True,
        ...     )
    """

    def __init__(
        self,
        config: FeedConfig | None = None,
        *,
        client: FetchClient | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        """Initialize the GalleryAPI.

        Args:
            config: Connection and cache settings (defaults from ``FeedConfig()``)
            client: Optional FetchClient (creates one from ``config`` if not provided)
            cache: Optional QueryCache (creates one honoring ``config.stale_time``)
        """
        self._config = config or FeedConfig()
        self._owns_client = client is None
        self._client = client or FetchClient(
            self._config.base_url, timeout=self._config.timeout
        )
        self._cache = cache or QueryCache(stale_time=self._config.stale_time)
        self._coordinator = FetchCoordinator(self._cache)
        self._feed = ImageFeed(
            self._client,
            self._coordinator,
            name=self._config.query_name,
            path=self._config.images_path,
        )
        self._mutation = ImageMutation(
            self._client,
            self._cache,
            path=self._config.images_path,
            invalidates=key_prefix(self._config.query_name),
        )
        self._closed = False

    @property
    def config(self) -> FeedConfig:
        return self._config

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def feed(self) -> ImageFeed:
        return self._feed

    @property
    def feed_state(self) -> FeedState:
        return self._feed.state

    # --- Feed ----------------------------------------------------------------

    async def load_first(self, *, force: bool = False) -> FeedState:
        return await self._feed.load_first(force=force)

    async def load_next(self) -> FeedState:
        return await self._feed.load_next()

    # --- Mutation ------------------------------------------------------------

    async def submit_mutation(
        self,
        payload: ImageSubmission | Mapping[str, Any],
        *,
        refetch: bool = False,
    ) -> Image:
        """Upload an image; with ``refetch`` also reload the stale first page.

        Errors from the upload propagate unchanged and leave the cache as it
        was. A failed refetch is reported through ``feed_state`` instead.
        """
        image = await self._mutation.submit(payload)
        if refetch:
            await self._feed.load_first()
        return image

    # --- Observers -----------------------------------------------------------

    def subscribe(self, callback: Observer[FeedState]) -> str:
        return self._feed.subscribe(callback)

    def unsubscribe(self, subscription_id: str) -> None:
        self._feed.unsubscribe(subscription_id)

    def on_notification(self, callback: Observer[Notification]) -> str:
        return self._mutation.subscribe(callback)

    def off_notification(self, subscription_id: str) -> None:
        self._mutation.unsubscribe(subscription_id)

    # --- Lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        """Close the API and clean up resources."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing GalleryAPI")
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> GalleryAPI:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
