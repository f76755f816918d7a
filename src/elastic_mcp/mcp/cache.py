"""
Time-expiring cache for the index list served by ``list_indices``.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.structured.models import IndexSummary
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)

DEFAULT_TTL_SECONDS = 600.0


@dataclass(frozen=True)
class CacheEntry:
    """The single cached index list and the clock reading it was captured at."""

    value: tuple[IndexSummary, ...]
    captured_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.captured_at < ttl_seconds


class IndexListCache:
    """Single-slot cache of the cluster's index summaries.

    The slot is replaced wholesale on refresh and never patched. There is no
    invalidation: an entry simply stops being used once ``ttl_seconds`` have
    passed since it was captured. Concurrent misses may both refresh; the
    last write wins.
    """

    def __init__(
        self,
        store: IDocumentStore,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the index list cache.

        Args:
            store: Backend used to fetch the index catalog on a miss.
            ttl_seconds: Time to live of the cached list in seconds.
            clock: Source of the current time in seconds.
        """
        self.store = store
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._stats = {
            'hits': 0,
            'misses': 0,
            'refreshes': 0,
        }

        logger.info(f"Index list cache initialized: ttl={ttl_seconds}s")

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    async def get_indices(self) -> tuple[list[IndexSummary], bool]:
        """Return the index summaries and whether they came from the cache.

        Backend failures propagate and leave the current entry untouched.
        """
        now = self._clock()
        entry = self._entry

        if entry is not None and entry.is_fresh(now, self.ttl_seconds):
            self._stats['hits'] += 1
            logger.debug(f"Index list cache hit ({len(entry.value)} indices)")
            return list(entry.value), True

        self._stats['misses'] += 1
        logger.debug("Index list cache miss, fetching catalog" if entry is None else "Index list cache expired, refreshing")

        raw_entries = await self.store.list_indices()
        summaries = tuple(IndexSummary.from_catalog_entry(raw) for raw in raw_entries)

        self._entry = CacheEntry(value=summaries, captured_at=now)
        self._stats['refreshes'] += 1
        logger.debug(f"Index list cache refreshed with {len(summaries)} indices")
        return list(summaries), False

    def get_stats(self) -> dict[str, Any]:
        """
        Get current cache statistics.
        """
        total = self._stats['hits'] + self._stats['misses']
        return {
            'cached': self._entry is not None,
            'ttl_seconds': self.ttl_seconds,
            'hits': self._stats['hits'],
            'misses': self._stats['misses'],
            'refreshes': self._stats['refreshes'],
            'total_requests': total,
            'hit_rate': self._stats['hits'] / total if total else 0.0,
        }
