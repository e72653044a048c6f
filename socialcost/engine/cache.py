"""
Bounded curve cache.

Insertion-ordered: once the capacity is exceeded the oldest entry is
evicted, regardless of how often it was read. Clearing is always safe.
"""

import logging
from collections import OrderedDict
from typing import Any, Hashable, Optional

logger = logging.getLogger(__name__)


class CurveCache:
    """Small FIFO cache for computed distribution curves."""

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._store: OrderedDict[Hashable, Any] = OrderedDict()

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: Hashable) -> Optional[Any]:
        if key in self._store:
            self.hits += 1
            logger.debug("Curve cache hit: %s", key)
            return self._store[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, value: Any) -> None:
        self._store[key] = value
        while len(self._store) > self._capacity:
            evicted, _ = self._store.popitem(last=False)
            self.evictions += 1
            logger.debug("Curve cache evicted: %s", evicted)

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> dict:
        return {
            "size": len(self._store),
            "capacity": self._capacity,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }

    def keys(self) -> list:
        return list(self._store.keys())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store
