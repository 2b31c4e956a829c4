from __future__ import annotations

import time
import typing as t
from collections import OrderedDict
from dataclasses import dataclass

from ..errors import ConfigurationError

DEFAULT_MAX_ENTRIES = 500


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_ratio(self) -> float:
        return self.hits / self.total if self.total else 0.0


class LRUCache:
    """Bounded LRU cache with optional TTL and hit/miss accounting.

    Entries are kept in an ``OrderedDict`` from least to most recently used.
    Expiry is lazy: a stale entry is only dropped when it is read (or pushed
    out by capacity pressure), so it keeps occupying a slot until then.

    Operations never await, so the cache is safe to share between tasks of a
    single event loop without locking. Stored values are not copied.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: t.Optional[float] = None,
        clock: t.Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ConfigurationError(f"max_entries must be >= 1, got {max_entries}")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ConfigurationError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._store: "OrderedDict[str, tuple[t.Any, float]]" = OrderedDict()
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._hits = 0
        self._misses = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def ttl_seconds(self) -> t.Optional[float]:
        return self._ttl

    def get(self, key: str) -> t.Optional[t.Any]:
        item = self._store.get(key)
        if item is None:
            self._misses += 1
            return None
        value, inserted_at = item
        if self._ttl is not None and self._clock() - inserted_at > self._ttl:
            del self._store[key]
            self._misses += 1
            return None
        self._hits += 1
        # mark as recently used; the insertion timestamp is kept
        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: t.Any) -> None:
        if key in self._store:
            del self._store[key]
        elif len(self._store) >= self._max_entries:
            # evict LRU
            self._store.popitem(last=False)
        self._store[key] = (value, self._clock())

    def get_stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        """Drop every entry. Hit/miss counters are kept."""
        self._store.clear()

    def keys(self) -> t.List[str]:
        """Keys from least to most recently used, without touching recency."""
        return list(self._store.keys())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
