"""Filter state controller for the bill listing view.

The controller is the single owner of the browsing session's mutable state:
the bill collection, the current ``FilterState``, the pagination window and
the result cache.  Hosts (a UI, the CLI, tests) create one instance and feed
it discrete events:

- collection loaded: ``set_bill_collection``
- keystroke: ``set_text_query`` (debounced, 300ms default)
- topic / sponsor / status selection: ``set_facet`` (immediate)
- clear button: ``clear_all``
- "load more" click: ``load_more``

Every filter commit replaces the state, resets the paginator to page 1 and
reads the new result through the cache, then notifies subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

from . import config
from .debounce import Debouncer, ScheduledAction, Scheduler
from .models import (
    Bill,
    FilteredResult,
    FilterState,
    clean_facet_values,
    normalize_query,
)
from .normalize import normalize_bills
from .pagination import Paginator
from .result_cache import ResultCache

LOGGER = logging.getLogger(__name__)

SEARCH_SOURCE = "search"
FACETS: tuple[str, ...] = ("topics", "sponsors", "status")

Listener = Callable[["FilterStateController"], Any]


@dataclass(frozen=True)
class ResultsView:
    """Immutable snapshot handed to renderers."""

    state: FilterState
    visible: tuple[Bill, ...]
    total_count: int
    filtered_count: int
    visible_count: int
    has_more: bool
    page_size: int
    page_count: int
    topic_options: tuple[str, ...]
    sponsor_options: tuple[str, ...]

    @property
    def is_collection_empty(self) -> bool:
        return self.total_count == 0

    @property
    def has_active_filters(self) -> bool:
        return self.state.has_active_filters


def _sorted_distinct(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))


class FilterStateController:
    def __init__(
        self,
        page_size: int | None = None,
        debounce_seconds: float | None = None,
        scheduler: Scheduler | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        self.paginator = Paginator(config.PAGE_SIZE if page_size is None else page_size)
        self.debouncer = Debouncer(
            config.SEARCH_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds,
            scheduler,
        )
        self.cache = cache if cache is not None else ResultCache(
            max_entries=config.CACHE_MAX_ENTRIES
        )
        self._state = FilterState()
        self._result = FilteredResult(state=self._state)
        self._topic_options: tuple[str, ...] = ()
        self._sponsor_options: tuple[str, ...] = ()
        self._listeners: list[Listener] = []

    # ── ingestion ────────────────────────────────────────────────────────

    def set_bill_collection(self, payload: Any) -> None:
        """Install the session's bill collection.

        *payload* may be a raw API response (any supported envelope), a list
        of raw records, or already-normalized ``Bill`` objects.  Filter state
        and pagination start over.
        """
        bills = normalize_bills(payload)
        self.debouncer.cancel(SEARCH_SOURCE)
        self.cache.set_collection(bills)
        self._topic_options = _sorted_distinct(t for b in bills for t in b.topics)
        self._sponsor_options = _sorted_distinct(n for b in bills for n in b.sponsor_names)
        LOGGER.info(
            "Loaded %d bills (%d topics, %d sponsors).",
            len(bills),
            len(self._topic_options),
            len(self._sponsor_options),
        )
        self._commit(FilterState())

    # ── filter events ────────────────────────────────────────────────────

    def set_text_query(self, raw: str | None) -> ScheduledAction:
        """Debounce a free-text change; the last call within the quiet period wins."""
        query = normalize_query(raw)
        return self.debouncer.schedule(lambda: self._commit_search(query), source=SEARCH_SOURCE)

    def flush(self) -> bool:
        """Commit a pending text query now instead of waiting out the timer."""
        return self.debouncer.flush(SEARCH_SOURCE)

    def _commit_search(self, query: str) -> None:
        if query == self._state.search:
            return
        self._commit(replace(self._state, search=query))

    def set_facet(self, name: str, values: Iterable[str] | str | None) -> None:
        """Apply a topic, sponsor or status selection immediately.

        ``topics`` and ``sponsors`` take any iterable of values (OR within the
        facet); ``status`` takes a single value, or None / "" for any status.
        """
        if name == "topics":
            new_state = replace(self._state, topics=clean_facet_values(values))
        elif name == "sponsors":
            new_state = replace(self._state, sponsors=clean_facet_values(values))
        elif name == "status":
            if values is not None and not isinstance(values, str):
                raise ValueError(f"status takes a single value, got {values!r}")
            new_state = replace(self._state, status=values or None)
        else:
            raise ValueError(f"Unknown facet {name!r}; expected one of {', '.join(FACETS)}")
        self._commit(new_state)

    def set_topics(self, topics: Iterable[str]) -> None:
        self.set_facet("topics", topics)

    def set_sponsors(self, sponsors: Iterable[str]) -> None:
        self.set_facet("sponsors", sponsors)

    def set_status(self, status: str | None) -> None:
        self.set_facet("status", status)

    def clear_all(self) -> None:
        """Drop every filter, including a text query still waiting on the debouncer."""
        self.debouncer.cancel(SEARCH_SOURCE)
        self._commit(FilterState())

    def load_more(self) -> bool:
        """Grow the visible window by one page.  Never refilters."""
        grew = self.paginator.advance(self.filtered_count)
        if grew:
            self._notify()
        return grew

    def set_page_size(self, page_size: int) -> None:
        self.paginator.page_size = page_size
        self._notify()

    def _commit(self, state: FilterState) -> None:
        self._state = state
        self.paginator.reset()
        self._result = self.cache.get_or_compute(state)
        self._notify()

    # ── subscribers ──────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every commit or page change.  Returns an unsubscribe."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── read side ────────────────────────────────────────────────────────

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def result(self) -> FilteredResult:
        return self._result

    @property
    def bills(self) -> tuple[Bill, ...]:
        return self.cache.bills

    @property
    def topic_options(self) -> tuple[str, ...]:
        return self._topic_options

    @property
    def sponsor_options(self) -> tuple[str, ...]:
        return self._sponsor_options

    @property
    def total_count(self) -> int:
        return len(self.cache.bills)

    @property
    def filtered_count(self) -> int:
        return len(self._result)

    @property
    def visible_count(self) -> int:
        return self.paginator.visible_count(self.filtered_count)

    @property
    def visible_slice(self) -> tuple[Bill, ...]:
        return tuple(self.paginator.visible_slice(self._result.bills))

    @property
    def has_more(self) -> bool:
        return self.paginator.has_more(self.filtered_count)

    def snapshot(self) -> ResultsView:
        return ResultsView(
            state=self._state,
            visible=self.visible_slice,
            total_count=self.total_count,
            filtered_count=self.filtered_count,
            visible_count=self.visible_count,
            has_more=self.has_more,
            page_size=self.paginator.page_size,
            page_count=self.paginator.page_count,
            topic_options=self._topic_options,
            sponsor_options=self._sponsor_options,
        )
