"""
In-memory memoization store for inventory status results.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_status_key(room_type_name: str, date_str: str, inventory: object) -> str:
    """Composite key; embedding inventory turns every inventory change into a miss."""
    return f"{room_type_name}-{date_str}-{inventory}"


class StatusCache(Generic[T]):
    """
    Bounded key -> result store with LRU eviction.

    Map operations happen under a lock. ``compute_fn`` runs outside it, so
    two racing callers may both compute, but the first stored value wins and
    both receive it.
    """

    def __init__(self, max_entries: int = 5000):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: "OrderedDict[str, T]" = OrderedDict()
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self._hits += 1
                return cached
            self._misses += 1

        value = compute_fn()

        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                self._entries.move_to_end(key)
                return existing
            self._entries[key] = value
            self._trim()
            return value

    def _trim(self) -> None:
        while len(self._entries) > self._max_entries:
            old_key, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug("Status cache full, dropped %s", old_key)

    def evict(self, key: str) -> bool:
        with self._lock:
            if key in self._entries:
                del self._entries[key]
                self._evictions += 1
                return True
            return False

    def evict_inventory(self, room_type_name: str, date_str: str, old_inventory: object) -> bool:
        """Drop the entry a write path just made stale."""
        key = make_status_key(room_type_name, date_str, old_inventory)
        removed = self.evict(key)
        if removed:
            logger.debug("Evicted stale status %s", key)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self._max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
