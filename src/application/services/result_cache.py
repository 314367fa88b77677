"""
Result Cache - Per-engine cache of parsed search results.

Entries expire a fixed time after they were written and the least
recently used entry is evicted once the cache grows beyond its maximum
size. Reads hand out fresh copies of the cached records.
"""

import threading
import time
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from src.domain.models import SearchResultRecord


class ResultCache:
    """Thread-safe expire-after-write LRU cache keyed by query."""

    def __init__(
        self,
        expire_after_mins: int,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            expire_after_mins: Minutes an entry stays valid after being written
            max_size: Maximum number of cached queries
            clock: Monotonic time source in seconds (overridable for tests)
        """
        if expire_after_mins < 1:
            raise ValueError("expire_after_mins must be at least 1")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")

        self._ttl_seconds = expire_after_mins * 60
        self._max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, Tuple[float, Tuple[SearchResultRecord, ...]]]" = OrderedDict()

    def get(self, key: str, limit: Optional[int] = None) -> Optional[List[SearchResultRecord]]:
        """
        Return copies of the cached records for ``key``.

        Args:
            key: Normalized query
            limit: Return at most this many records

        Returns:
            Fresh list of copied records, or None on a miss or expired entry
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            written_at, records = entry
            if self._clock() - written_at >= self._ttl_seconds:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)

        selected = records if limit is None else records[:limit]
        return [record.model_copy() for record in selected]

    def put(self, key: str, records: List[SearchResultRecord]) -> None:
        """Store copies of ``records`` under ``key``, replacing any older entry."""
        snapshot = tuple(record.model_copy() for record in records)
        with self._lock:
            self._entries[key] = (self._clock(), snapshot)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        # Membership checks neither refresh LRU order nor purge expired entries
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() - entry[0] < self._ttl_seconds
