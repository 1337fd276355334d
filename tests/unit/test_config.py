"""Unit tests for FeedConfig."""

import pytest

from upfi.feed.config import FEED_QUERY_NAME, IMAGES_PATH, FeedConfig


def test_defaults():
    config = FeedConfig()
    assert config.images_path == IMAGES_PATH == "/api/images"
    assert config.query_name == FEED_QUERY_NAME == "images"
    assert config.stale_time is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("UPFI_API_URL", "https://upfi.example.com/")
    monkeypatch.setenv("UPFI_HTTP_TIMEOUT", "5")
    monkeypatch.setenv("UPFI_STALE_TIME", "60")

    config = FeedConfig.from_env()

    assert config.base_url == "https://upfi.example.com"
    assert config.timeout == 5.0
    assert config.stale_time == 60.0


def test_from_env_defaults(monkeypatch):
    for name in ("UPFI_API_URL", "UPFI_HTTP_TIMEOUT", "UPFI_STALE_TIME"):
        monkeypatch.delenv(name, raising=False)
    assert FeedConfig.from_env() == FeedConfig()


@pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"stale_time": -1}])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        FeedConfig(**kwargs)
