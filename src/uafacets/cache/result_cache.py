"""
Bounded memoization of composite classification results.

Maps raw agent strings to complete ``Client`` values. Eviction is
delegated to ``cachetools.LRUCache``; a single lock makes reads and writes
safe for concurrent callers. Only the size bound is guaranteed, not which
entry gets evicted.
"""

import threading
from dataclasses import dataclass
from typing import Optional

from cachetools import LRUCache

from ..logging import cache_logger
from ..models.client import Client
from ..utils.constants import MAX_CACHE_SIZE, MIN_CACHE_SIZE

logger = cache_logger()


@dataclass
class CacheStats:
    """Statistics for cache monitoring."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0


class ResultCache:
    """Thread-safe, size-bounded cache of ``Client`` results."""

    def __init__(
        self,
        max_size: int = MAX_CACHE_SIZE,
        initial_size: int = MIN_CACHE_SIZE,
    ):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries kept
            initial_size: Expected working set; must not exceed max_size.
                The LRU primitive allocates lazily, so this is validated
                and reported but reserves nothing.
        """
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if not 0 < initial_size <= max_size:
            raise ValueError(
                f"initial_size must be between 1 and max_size ({max_size}), "
                f"got {initial_size}"
            )

        self.max_size = max_size
        self.initial_size = initial_size
        self._cache: LRUCache = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()
        self._stats = CacheStats(max_size=max_size)

    def get(self, agent_string: Optional[str]) -> Optional[Client]:
        """Return the cached result, or None on a miss."""
        with self._lock:
            client = self._cache.get(agent_string)
            if client is None:
                self._stats.misses += 1
            else:
                self._stats.hits += 1
        return client

    def put(self, agent_string: Optional[str], client: Client) -> None:
        """Store a complete result, evicting an older entry when full."""
        with self._lock:
            evicting = (
                agent_string not in self._cache
                and len(self._cache) >= self.max_size
            )
            self._cache[agent_string] = client
            if evicting:
                self._stats.evictions += 1
                if self._stats.evictions == 1:
                    logger.debug("Result cache full, evicting", max_size=self.max_size)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def stats(self) -> CacheStats:
        """Snapshot of the current statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                size=len(self._cache),
                max_size=self.max_size,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, agent_string: object) -> bool:
        with self._lock:
            return agent_string in self._cache
