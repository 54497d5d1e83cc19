"""Collection snapshots guarded by monotonically increasing refetch stamps.

A refetch takes a stamp before it reads the database. When it finishes, its
result is applied only if no newer refetch has already been applied, so a slow
reload can never overwrite a fresher one. Invalidation also takes a stamp: a
result whose refetch started before the invalidation is stored but not served.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from restodesk.services.change_feed import ChangeFeed, change_feed

CHANNEL_COLLECTIONS: dict[str, tuple[str, ...]] = {
    "tables": ("tables",),
    "menu": ("menu_categories", "menu_items"),
    "inventory": ("inventory_items",),
}


@dataclass
class _Entry:
    value: Any = None
    applied_stamp: int = 0
    invalidated_stamp: int = 0

    @property
    def is_fresh(self) -> bool:
        return self.applied_stamp > self.invalidated_stamp


class VersionedCache:
    """Thread-safe cache keyed by collection name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stamps = itertools.count(1)
        self._entries: dict[str, _Entry] = {}

    def begin_refresh(self, key: str) -> int:
        """Return the stamp a refetch of key must present when applying."""
        with self._lock:
            self._entries.setdefault(key, _Entry())
            return next(self._stamps)

    def apply(self, key: str, stamp: int, value: Any) -> bool:
        """Store value unless a newer refetch already landed; returns whether it was stored."""
        with self._lock:
            entry = self._entries.setdefault(key, _Entry())
            if stamp <= entry.applied_stamp:
                return False
            entry.value = value
            entry.applied_stamp = stamp
            return True

    def invalidate(self, key: str) -> None:
        with self._lock:
            entry = self._entries.setdefault(key, _Entry())
            entry.invalidated_stamp = next(self._stamps)

    def get(self, key: str) -> tuple[bool, Any]:
        """Return ``(hit, value)``; a stale or missing entry is a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not entry.is_fresh:
                return False, None
            return True, entry.value

    def applied_stamp(self, key: str) -> int:
        with self._lock:
            entry = self._entries.get(key)
            return entry.applied_stamp if entry is not None else 0

    def fetch(self, key: str, loader: Callable[[], Any]) -> Any:
        """Serve key from cache or reload it with loader."""
        hit, value = self.get(key)
        if hit:
            return value
        stamp = self.begin_refresh(key)
        value = loader()
        if self.apply(key, stamp, value):
            return value
        with self._lock:
            return self._entries[key].value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def bind(self, feed: ChangeFeed) -> list[Callable[[], None]]:
        """Invalidate collections whenever their channel publishes."""
        unsubscribers: list[Callable[[], None]] = []
        for channel, keys in CHANNEL_COLLECTIONS.items():

            def _invalidate(_channel: str, keys: tuple[str, ...] = keys) -> None:
                for key in keys:
                    self.invalidate(key)

            unsubscribers.append(feed.subscribe(channel, _invalidate))
        return unsubscribers


collection_cache: VersionedCache = VersionedCache()
collection_cache.bind(change_feed)
