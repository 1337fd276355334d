"""Keyed store of the latest known result per query.

Architecture:
    The cache is the single source of truth for what the UI shows. Entries are
    frozen snapshots replaced on every transition, so a reader holding an entry
    never observes a half-applied update and only the cache mutates its map.

Design Decisions:
    - Mark vs act: ``invalidate`` only flags entries stale; callers decide when
      to re-fetch, so a pure cache write never causes network traffic
    - Stale-while-error: ``fail`` keeps the last good value readable
    - Epochs: ``invalidate`` bumps a per-entry counter so a fetch that started
      before the invalidation can settle without hiding it
    - Explicit instance: passed to coordinators instead of a process-wide
      singleton, one cache per gallery
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from ..core.enums import QueryStatus
from ..core.keys import KeyPredicate, QueryKey
from ..utils.observers import Observer, ObserverSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryEntry:
    """Cached state of one query."""

    key: QueryKey
    status: QueryStatus = QueryStatus.IDLE
    value: Any = None
    error: Exception | None = None
    fetched_at: float | None = None
    stale: bool = False
    epoch: int = 0

    @property
    def has_value(self) -> bool:
        return self.fetched_at is not None


class QueryCache:
    """In-memory query cache with invalidation and change notifications."""

    def __init__(
        self,
        *,
        stale_time: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            stale_time: Age in seconds after which a successful entry counts as
                stale even without invalidation (None disables ageing)
            clock: Time source for ``fetched_at``
        """
        self._entries: dict[QueryKey, QueryEntry] = {}
        self._stale_time = stale_time
        self._clock = clock
        self._observers: ObserverSet[QueryEntry] = ObserverSet("cache")

    # ----------------------
    # Reads
    # ----------------------
    def read(self, key: QueryKey) -> QueryEntry | None:
        """Latest entry for ``key`` or None if it was never fetched."""
        return self._entries.get(key)

    def is_stale(self, key: QueryKey) -> bool:
        """Whether ``key`` needs a fetch before its value can be trusted.

        True when missing, invalidated, failed on its last fetch, or older
        than ``stale_time``.
        """
        entry = self._entries.get(key)
        if entry is None or not entry.has_value:
            return True
        if entry.stale or entry.status == QueryStatus.ERROR:
            return True
        if self._stale_time is not None and entry.fetched_at is not None:
            return self._clock() - entry.fetched_at >= self._stale_time
        return False

    def epoch(self, key: QueryKey) -> int:
        """Number of times ``key`` has been invalidated (0 when missing)."""
        entry = self._entries.get(key)
        return entry.epoch if entry is not None else 0

    def keys(self) -> list[QueryKey]:
        return list(self._entries)

    def snapshot(self) -> dict[QueryKey, QueryEntry]:
        return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ----------------------
    # Writes
    # ----------------------
    def mark_loading(self, key: QueryKey) -> QueryEntry:
        """Flag ``key`` as loading, creating the entry on first fetch."""
        entry = self._entries.get(key) or QueryEntry(key=key)
        return self._put(replace(entry, status=QueryStatus.LOADING))

    def write(self, key: QueryKey, result: Any, *, stale: bool = False) -> QueryEntry:
        """Store a successful result. Pass ``stale=True`` for data already outdated."""
        entry = self._entries.get(key) or QueryEntry(key=key)
        return self._put(
            replace(
                entry,
                status=QueryStatus.SUCCESS,
                value=result,
                error=None,
                fetched_at=self._clock(),
                stale=stale,
            )
        )

    def fail(self, key: QueryKey, error: Exception) -> QueryEntry:
        """Record a failed fetch, keeping the last good value readable."""
        entry = self._entries.get(key) or QueryEntry(key=key)
        return self._put(replace(entry, status=QueryStatus.ERROR, error=error))

    def invalidate(self, predicate: KeyPredicate) -> list[QueryKey]:
        """Mark every entry whose key matches ``predicate`` as stale.

        Returns:
            Keys that were marked
        """
        matched = [key for key in self._entries if predicate(key)]
        for key in matched:
            entry = self._entries[key]
            self._put(replace(entry, stale=True, epoch=entry.epoch + 1))
        logger.debug("Invalidated queries", extra={"keys": [repr(k) for k in matched]})
        return matched

    def clear(self) -> None:
        """Drop every entry. Observers receive an empty IDLE entry per removed key."""
        removed = list(self._entries)
        self._entries.clear()
        for key in removed:
            self._observers.notify(QueryEntry(key=key))

    # ----------------------
    # Subscriptions
    # ----------------------
    def subscribe(self, callback: Observer[QueryEntry]) -> str:
        """Receive every new entry. Returns a subscription id."""
        return self._observers.subscribe(callback)

    def unsubscribe(self, subscription_id: str) -> None:
        self._observers.unsubscribe(subscription_id)

    def _put(self, entry: QueryEntry) -> QueryEntry:
        self._entries[entry.key] = entry
        self._observers.notify(entry)
        return entry
