"""Feed page data model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .image import Image


class Page(BaseModel):
    """One fetched batch of images.

    ``cursor`` is the token for the next page; None marks the last page.
    """

    items: tuple[Image, ...] = ()
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("cursor", mode="before")
    @classmethod
    def normalize_cursor(cls, v: Any) -> Any:
        """Treat an empty cursor as end of feed."""
        if v == "":
            return None
        return v

    @property
    def is_last(self) -> bool:
        return self.cursor is None

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self.items]

    def without_ids(self, seen: Iterable[str]) -> Page:
        """Copy of this page minus items whose id is in ``seen``."""
        seen_ids = set(seen)
        kept = tuple(item for item in self.items if item.id not in seen_ids)
        if len(kept) == len(self.items):
            return self
        return Page(items=kept, cursor=self.cursor)


class ImagePageResponse(BaseModel):
    """Wire shape of ``GET /api/images``: ``{"data": [...], "after": cursor}``."""

    data: list[Image] = Field(default_factory=list)
    after: str | None = None

    model_config = ConfigDict(frozen=True)

    def to_page(self) -> Page:
        return Page(items=tuple(self.data), cursor=self.after)


class ImageCreatedResponse(BaseModel):
    """Wire shape of ``POST /api/images``: ``{"image": {...}}``."""

    image: Image

    model_config = ConfigDict(frozen=True)
