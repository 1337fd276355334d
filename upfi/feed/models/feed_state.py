"""Read-only snapshot of a paginated feed."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import FeedStatus
from .image import Image
from .page import Page


@dataclass(frozen=True)
class FeedState:
    """Snapshot published by ``ImageFeed`` on every transition.

    ``pages`` is ordered oldest request first. ``error`` belongs to the last
    first-page load; ``next_error`` to the last "load more" attempt and never
    invalidates pages already shown.
    """

    pages: tuple[Page, ...] = ()
    status: FeedStatus = FeedStatus.IDLE
    is_fetching_next: bool = False
    generation: int = 0
    error: Exception | None = None
    next_error: Exception | None = None

    @property
    def has_next_page(self) -> bool | None:
        """None until the first page is known, then whether a cursor remains."""
        if not self.pages:
            return None
        return self.pages[-1].cursor is not None

    @property
    def next_cursor(self) -> str | None:
        if not self.pages:
            return None
        return self.pages[-1].cursor

    @property
    def flat_items(self) -> list[Image]:
        """Items in display order; the first occurrence of an id wins."""
        seen: set[str] = set()
        out: list[Image] = []
        for page in self.pages:
            for item in page.items:
                if item.id in seen:
                    continue
                seen.add(item.id)
                out.append(item)
        return out

    @property
    def is_loading(self) -> bool:
        return self.status.is_loading
