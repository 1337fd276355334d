"""Core components."""

from .enums import FeedStatus, NotificationStatus, QueryStatus
from .exceptions import (
    FeedError,
    NetworkError,
    ServerError,
    StaleResultDiscarded,
    ValidationError,
)
from .keys import KeyPredicate, QueryKey, key_prefix

__all__ = [
    "FeedStatus",
    "QueryStatus",
    "NotificationStatus",
    "FeedError",
    "NetworkError",
    "ServerError",
    "ValidationError",
    "StaleResultDiscarded",
    "QueryKey",
    "KeyPredicate",
    "key_prefix",
]
