"""High-level clients: the paginated feed and the upload mutation."""

from .image_feed import ImageFeed
from .mutation import ImageMutation

__all__ = ["ImageFeed", "ImageMutation"]
