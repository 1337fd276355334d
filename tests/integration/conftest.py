"""Shared fixtures for integration tests.

Tests here hit a real gallery API: set RUN_UPFI_NETWORK_TESTS=1 and
UPFI_API_URL to run them.
"""

import pytest

from upfi.feed import FeedConfig


@pytest.fixture
def live_config() -> FeedConfig:
    return FeedConfig.from_env()
