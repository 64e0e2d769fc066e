"""Read-through memoization of filter results for one browsing session.

The bill collection is fetched once and never changes for the lifetime of a
session, so cached results never go stale and there is no TTL.  Installing a
new collection clears the cache.

By default the cache is unbounded (the number of distinct filter combinations
a user can reach is small).  With ``max_entries > 0`` the least recently used
entry is evicted first.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass

from .filtering import filter_bills
from .models import Bill, FilteredResult, FilterState

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    entries: int
    hits: int
    misses: int
    evictions: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class ResultCache:
    """Canonical filter key → ``FilteredResult``."""

    def __init__(self, bills: Iterable[Bill] = (), max_entries: int = 0) -> None:
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self.max_entries = max_entries
        self._bills: tuple[Bill, ...] = tuple(bills)
        self._entries: OrderedDict[str, FilteredResult] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    # ── collection ───────────────────────────────────────────────────────

    @property
    def bills(self) -> tuple[Bill, ...]:
        return self._bills

    def set_collection(self, bills: Iterable[Bill]) -> None:
        """Install a new bill collection and drop every cached result."""
        self._bills = tuple(bills)
        self.clear()

    # ── lookups ──────────────────────────────────────────────────────────

    def get(self, state: FilterState) -> FilteredResult | None:
        """Return the cached result for *state* without computing on a miss."""
        key = state.cache_key()
        result = self._entries.get(key)
        if result is not None:
            self._entries.move_to_end(key)
        return result

    def get_or_compute(self, state: FilterState) -> FilteredResult:
        """Return the cached result for *state*, filtering the collection on a miss."""
        key = state.cache_key()
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            LOGGER.debug("Cache HIT: %s", key)
            return cached

        self.misses += 1
        result = FilteredResult(state=state, bills=filter_bills(self._bills, state))
        self._store(key, result)
        LOGGER.debug("Cache SET: %s (%d bills)", key, len(result))
        return result

    def _store(self, key: str, result: FilteredResult) -> None:
        self._entries[key] = result
        self._entries.move_to_end(key)
        if self.max_entries > 0:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                LOGGER.debug("Cache EVICT: %s", evicted)

    # ── housekeeping ─────────────────────────────────────────────────────

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=len(self._entries),
            hits=self.hits,
            misses=self.misses,
            evictions=self.evictions,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, state: object) -> bool:
        if not isinstance(state, FilterState):
            return False
        return state.cache_key() in self._entries
