"""Time-bounded cache for brand lookups keyed by a ~1 km grid cell."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from cachetools import TTLCache

from ...models.domain import Coordinate

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 4096


def cache_key(brand: str, point: Coordinate) -> str:
    # two decimals is roughly a 1 km cell, so nearby starts share an answer
    return f"{brand}:{point.lat:.2f},{point.lon:.2f}"


class GeoCache:
    """Brand + grid cell -> coordinate.

    Entries expire ``ttl_seconds`` after insertion and expired entries are
    dropped on the next write or size check. Failed lookups are never stored.
    Concurrent writers for the same key are allowed; the last one wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)
        self._lock = threading.Lock()

    def get(self, brand: str, point: Coordinate) -> Coordinate | None:
        key = cache_key(brand, point)
        with self._lock:
            coordinate = self._entries.get(key)
        if coordinate is None:
            logger.debug(f"Cache miss for {key}")
        return coordinate

    def put(self, brand: str, point: Coordinate, coordinate: Coordinate) -> None:
        with self._lock:
            self._entries[cache_key(brand, point)] = coordinate

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
