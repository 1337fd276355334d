"""High-level API facades."""

from .gallery_api import GalleryAPI

__all__ = ["GalleryAPI"]
