"""Shared gallery API constants and runtime configuration.

This module centralizes the endpoint path, the feed query name and the upload
limits so the cache, the feed controller and the mutation stay small.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:3000"
IMAGES_PATH = "/api/images"
FEED_QUERY_NAME = "images"
DEFAULT_TIMEOUT = 30.0

# Upload form limits
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
SUPPORTED_IMAGE_TYPES = re.compile(r"^image/(png|jpeg|jpg|gif)$")
TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 65

ENV_BASE_URL = "UPFI_API_URL"
ENV_TIMEOUT = "UPFI_HTTP_TIMEOUT"
ENV_STALE_TIME = "UPFI_STALE_TIME"


@dataclass(frozen=True)
class FeedConfig:
    """Connection and cache settings for a gallery feed.

    Args:
        base_url: Root URL of the gallery API
        images_path: Path serving both the feed (GET) and uploads (POST)
        query_name: First part of every feed query key
        timeout: Total HTTP timeout in seconds
        stale_time: Seconds after which a cached result counts as stale;
            None keeps results fresh until explicitly invalidated
    """

    base_url: str = DEFAULT_BASE_URL
    images_path: str = IMAGES_PATH
    query_name: str = FEED_QUERY_NAME
    timeout: float = DEFAULT_TIMEOUT
    stale_time: float | None = None

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.stale_time is not None and self.stale_time < 0:
            raise ValueError("stale_time must be >= 0")

    @classmethod
    def from_env(cls) -> FeedConfig:
        """Build a config from ``UPFI_*`` environment variables.

        Unset variables fall back to the module defaults.
        """
        stale_time = os.environ.get(ENV_STALE_TIME)
        return cls(
            base_url=os.environ.get(ENV_BASE_URL, DEFAULT_BASE_URL).rstrip("/"),
            timeout=float(os.environ.get(ENV_TIMEOUT, DEFAULT_TIMEOUT)),
            stale_time=float(stale_time) if stale_time else None,
        )
