"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .keys import QueryKey


class FeedError(Exception):
    """Base exception for all library errors."""

    pass


class NetworkError(FeedError):
    """Transport failure: the request never produced an HTTP response."""

    pass


class ServerError(FeedError):
    """Non-2xx response or a response body that could not be understood."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ValidationError(FeedError):
    """Payload rejected before transmission.

    Carries every failing rule so a form layer can show all of them at once.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class StaleResultDiscarded(FeedError):
    """A fetch settled after a newer request superseded it.

    Internal signal only; never attached to user-visible state.
    """

    def __init__(self, key: QueryKey, generation: int) -> None:
        super().__init__(f"Discarded result for {key!r} from generation {generation}")
        self.key = key
        self.generation = generation
