"""Unit tests for structural query keys."""

import pytest

from upfi.feed.core import QueryKey, key_prefix


def test_keys_with_equal_parts_are_equal_and_hash_equal():
    a = QueryKey.of("images", {"after": "c1", "limit": 10})
    b = QueryKey.of("images", {"limit": 10, "after": "c1"})
    assert a == b
    assert hash(a) == hash(b)
    assert {a: 1}[b] == 1


def test_keys_with_different_cursor_differ():
    assert QueryKey.of("images", {"after": "c1"}) != QueryKey.of("images", {"after": "c2"})
    assert QueryKey.of("images") != QueryKey.of("images", {"after": "c1"})


def test_key_is_a_sequence():
    key = QueryKey.of("images", {"after": "c1"})
    assert key[0] == "images"
    assert len(key) == 2
    assert list(key)[0] == "images"


def test_param_reads_mapping_segment():
    key = QueryKey.of("images", {"after": "c1"})
    assert key.param("after") == "c1"
    assert key.param("missing") is None
    assert QueryKey.of("images").param("after") is None


def test_key_is_immutable():
    key = QueryKey.of("images")
    with pytest.raises(AttributeError):
        key._parts = ("other",)


def test_empty_key_rejected():
    with pytest.raises(ValueError):
        QueryKey.of()


def test_unsupported_part_rejected():
    with pytest.raises(TypeError):
        QueryKey.of("images", object())


def test_key_prefix_predicate():
    matches = key_prefix("images")
    assert matches(QueryKey.of("images"))
    assert matches(QueryKey.of("images", {"after": "c1"}))
    assert not matches(QueryKey.of("users"))
