"""Data models for the gallery feed.

Architecture:
    Wire models (Image, pages, submissions) are Pydantic v2 models, frozen so a
    value returned by the server cannot be modified once cached. State
    snapshots and notifications are frozen dataclasses, mirroring how events
    are modelled elsewhere in the library.

Model Categories:
    - Wire: Image, ImagePageResponse, ImageCreatedResponse, ImageSubmission
    - Feed: Page, FeedState
    - Events: Notification
"""

from .events import Notification
from .feed_state import FeedState
from .image import Image
from .page import ImageCreatedResponse, ImagePageResponse, Page
from .submission import ImageSubmission, validate_upload

__all__ = [
    "FeedState",
    "Image",
    "ImageCreatedResponse",
    "ImagePageResponse",
    "ImageSubmission",
    "Notification",
    "Page",
    "validate_upload",
]
