"""UpFi Feed - asynchronous query cache and infinite pagination for the image gallery."""

from .api import GalleryAPI
from .cache import FetchCoordinator, QueryCache, QueryEntry
from .clients import ImageFeed, ImageMutation
from .config import FeedConfig
from .core import (
    FeedError,
    FeedStatus,
    NetworkError,
    NotificationStatus,
    QueryKey,
    QueryStatus,
    ServerError,
    StaleResultDiscarded,
    ValidationError,
    key_prefix,
)
from .models import (
    FeedState,
    Image,
    ImageSubmission,
    Notification,
    Page,
    validate_upload,
)
from .runtime import FetchClient, FetchResponse, HTTPClient

__all__ = [
    # Facade
    "GalleryAPI",
    "FeedConfig",
    # Engine
    "QueryCache",
    "QueryEntry",
    "FetchCoordinator",
    "ImageFeed",
    "ImageMutation",
    # Transport
    "FetchClient",
    "FetchResponse",
    "HTTPClient",
    # Keys and enums
    "QueryKey",
    "key_prefix",
    "QueryStatus",
    "FeedStatus",
    "NotificationStatus",
    # Models
    "FeedState",
    "Image",
    "ImageSubmission",
    "Notification",
    "Page",
    "validate_upload",
    # Exceptions
    "FeedError",
    "NetworkError",
    "ServerError",
    "ValidationError",
    "StaleResultDiscarded",
]
