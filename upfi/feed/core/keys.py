"""Structural query keys.

A query key identifies one logical query, e.g. ``("images",)`` for the first
page of the feed or ``("images", {"after": "c1"})`` for a later page. Mapping
segments are frozen into sorted ``(name, value)`` tuples so two keys built from
equal parts compare and hash equal regardless of dict ordering.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

KeyPart = Any


def _freeze(part: KeyPart) -> KeyPart:
    if isinstance(part, Mapping):
        return tuple(sorted((str(k), _freeze(v)) for k, v in part.items()))
    if isinstance(part, (list, tuple)):
        return tuple(_freeze(p) for p in part)
    if part is None or isinstance(part, (str, int, float, bool)):
        return part
    raise TypeError(f"Unsupported query key part: {type(part).__name__}")


class QueryKey:
    """Immutable, hashable sequence of primitive key parts."""

    __slots__ = ("_parts",)

    def __init__(self, parts: tuple[KeyPart, ...]) -> None:
        object.__setattr__(self, "_parts", tuple(_freeze(p) for p in parts))

    @classmethod
    def of(cls, *parts: KeyPart) -> QueryKey:
        """Build a key from positional parts: ``QueryKey.of("images", {"after": c})``."""
        if not parts:
            raise ValueError("QueryKey requires at least one part")
        return cls(parts)

    @property
    def parts(self) -> tuple[KeyPart, ...]:
        return self._parts

    def param(self, name: str) -> KeyPart:
        """Look up ``name`` in the first mapping segment, or None."""
        for part in self._parts[1:]:
            if isinstance(part, tuple) and all(
                isinstance(item, tuple) and len(item) == 2 for item in part
            ):
                for k, v in part:
                    if k == name:
                        return v
        return None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("QueryKey is immutable")

    def __getitem__(self, index: int) -> KeyPart:
        return self._parts[index]

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[KeyPart]:
        return iter(self._parts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryKey):
            return self._parts == other._parts
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._parts)

    def __repr__(self) -> str:
        return f"QueryKey{self._parts!r}"


KeyPredicate = Callable[[QueryKey], bool]


def key_prefix(name: str) -> KeyPredicate:
    """Predicate matching every key whose first part is ``name``."""

    def _matches(key: QueryKey) -> bool:
        return len(key) > 0 and key[0] == name

    return _matches
