"""Notification payloads delivered to UI observers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.enums import NotificationStatus
from .image import Image


@dataclass(frozen=True)
class Notification:
    """Toast-like message emitted after a mutation settles."""

    status: NotificationStatus
    title: str
    description: str
    timestamp: datetime = field(default_factory=datetime.now)
    image: Image | None = None
    error: Exception | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def uploaded(cls, image: Image) -> Notification:
        return cls(
            status=NotificationStatus.SUCCESS,
            title="Image uploaded",
            description="Your image was added to the gallery.",
            image=image,
        )

    @classmethod
    def upload_failed(cls, error: Exception) -> Notification:
        return cls(
            status=NotificationStatus.ERROR,
            title="Upload failed",
            description="Something went wrong while adding your image.",
            error=error,
        )

    @classmethod
    def rejected(cls, error: Exception) -> Notification:
        """Payload never left the client: missing image or invalid fields."""
        return cls(
            status=NotificationStatus.WARNING,
            title="Image not added",
            description="Upload an image and fill in every field before saving.",
            error=error,
            metadata={"errors": list(getattr(error, "errors", []))},
        )
