"""Image upload mutation with cache invalidation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..cache import QueryCache
from ..config import FEED_QUERY_NAME, IMAGES_PATH
from ..core.exceptions import ServerError, ValidationError
from ..core.keys import KeyPredicate, key_prefix
from ..models import Image, ImageCreatedResponse, ImageSubmission, Notification
from ..runtime.rest import FetchClient
from ..utils.observers import Observer, ObserverSet

logger = logging.getLogger(__name__)


class ImageMutation:
    """Creates images and keeps the feed cache consistent afterwards.

    ``submit`` awaits the server before anything else happens: invalidation
    and the success notification only follow a confirmed write, and a failed
    write leaves the cache exactly as it was. Every call is one attempt;
    concurrent submissions are independent.
    """

    def __init__(
        self,
        client: FetchClient,
        cache: QueryCache,
        *,
        path: str = IMAGES_PATH,
        invalidates: KeyPredicate | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._path = path
        self._invalidates = invalidates or key_prefix(FEED_QUERY_NAME)
        self._observers: ObserverSet[Notification] = ObserverSet("notification")

    async def submit(self, payload: ImageSubmission | Mapping[str, Any]) -> Image:
        """Validate, send and confirm a new image.

        Raises:
            ValidationError: Payload rejected before transmission
            NetworkError: Transport failure
            ServerError: Non-2xx or malformed response
        """
        try:
            submission = ImageSubmission.parse(payload)
        except ValidationError as e:
            self._observers.notify(Notification.rejected(e))
            raise

        try:
            response = await self._client.post(self._path, submission.to_body())
            image = self._parse_image(response.body)
        except Exception as e:
            logger.debug("Image upload failed", extra={"error": str(e)})
            self._observers.notify(Notification.upload_failed(e))
            raise

        invalidated = self._cache.invalidate(self._invalidates)
        logger.debug(
            "Image uploaded",
            extra={"image_id": image.id, "invalidated": len(invalidated)},
        )
        self._observers.notify(Notification.uploaded(image))
        return image

    def subscribe(self, callback: Observer[Notification]) -> str:
        """Receive a ``Notification`` whenever a submission settles."""
        return self._observers.subscribe(callback)

    def unsubscribe(self, subscription_id: str) -> None:
        self._observers.unsubscribe(subscription_id)

    def _parse_image(self, body: Any) -> Image:
        try:
            return ImageCreatedResponse.model_validate(body).image
        except PydanticValidationError as e:
            raise ServerError(f"Malformed upload response from {self._path}", body=body) from e
