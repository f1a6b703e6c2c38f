"""Regional Fault Cache - Shared in-process state.

Maps a grid-quantized query key to the faults found for that cell.
Eviction is FIFO by first insertion, not LRU.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass

from fault_proximity.core.fault import FaultFeature
from fault_proximity.core.grid import GridCacheKey


logger = logging.getLogger(__name__)


DEFAULT_MAX_ENTRIES = 50


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache statistics.

    Attributes:
        size: Number of cached cells
        max_entries: Capacity
        hits: Lookups served from cache
        misses: Lookups that required a scan
        dataset_loaded: Whether the fault dataset is in memory
    """
    size: int
    max_entries: int
    hits: int
    misses: int
    dataset_loaded: bool = False


class RegionalFaultCache:
    """Bounded FIFO cache of nearby-fault results keyed by grid cell."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[GridCacheKey, tuple[FaultFeature, ...]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: GridCacheKey) -> tuple[FaultFeature, ...] | None:
        """Return cached faults for a key, or None on a miss."""
        with self._lock:
            faults = self._entries.get(key)
            if faults is None:
                self.misses += 1
            else:
                self.hits += 1
            return faults

    def put(self, key: GridCacheKey, faults: tuple[FaultFeature, ...]) -> None:
        """Store faults for a key, evicting the oldest key if at capacity.

        Overwriting an existing key keeps its original insertion position.
        """
        with self._lock:
            if key not in self._entries:
                while len(self._entries) >= self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Evicted regional fault cache entry %s", evicted)
            self._entries[key] = tuple(faults)

    def clear(self) -> None:
        """Remove all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def keys(self) -> list[GridCacheKey]:
        """Return keys in insertion order, oldest first."""
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_entries=self.max_entries,
                hits=self.hits,
                misses=self.misses,
            )

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
