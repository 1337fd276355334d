"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from upfi.feed.core import (
    FeedError,
    NetworkError,
    QueryKey,
    ServerError,
    StaleResultDiscarded,
    ValidationError,
)


def test_server_error_with_status_and_body():
    error = ServerError("boom", status_code=503, body={"message": "down"})
    assert str(error) == "boom"
    assert error.status_code == 503
    assert error.body == {"message": "down"}
    assert isinstance(error, FeedError)


def test_network_error_is_feed_error():
    assert isinstance(NetworkError("offline"), FeedError)


def test_validation_error_lists_rules():
    error = ValidationError("invalid", errors=["title: too short"])
    assert error.errors == ["title: too short"]
    assert ValidationError("invalid").errors == []


def test_stale_result_discarded_carries_context():
    key = QueryKey.of("images")
    error = StaleResultDiscarded(key, generation=3)
    assert error.key == key
    assert error.generation == 3
    assert "generation 3" in str(error)
