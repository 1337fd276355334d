"""Status enumerations shared by the cache and the feed controller.

Architecture:
    String enums so states serialize cleanly into log records and UI payloads.

Key Types:
    - QueryStatus: lifecycle of a single cached query
    - FeedStatus: state machine of one paginated feed
    - NotificationStatus: severity of a user-facing notification
"""

from enum import Enum


class QueryStatus(str, Enum):
    """Lifecycle of a cache entry."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FeedStatus(str, Enum):
    """State machine of a paginated feed.

    IDLE -> LOADING_FIRST -> READY <-> LOADING_MORE
    LOADING_FIRST -> ERROR -> LOADING_FIRST (retry)
    """

    IDLE = "idle"
    LOADING_FIRST = "loading_first"
    LOADING_MORE = "loading_more"
    READY = "ready"
    ERROR = "error"

    @property
    def is_loading(self) -> bool:
        return self in (FeedStatus.LOADING_FIRST, FeedStatus.LOADING_MORE)


class NotificationStatus(str, Enum):
    """Severity of a notification shown after a mutation."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
