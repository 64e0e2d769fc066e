"""Filter predicates over the in-memory bill collection.

A bill passes a ``FilterState`` when it passes every active facet:

- **search**: every whitespace-separated term is a substring of the bill's
  lower-cased corpus (AND, not ranked, not whole-word)
- **topics** / **sponsors**: at least one selected value is present (OR)
- **status**: exact equality

A facet with nothing selected is a no-op, so the empty state matches every
bill.  All functions here are pure.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable

from .models import Bill, FilterState
from .naming import meaningful_name


@functools.lru_cache(maxsize=8192)
def searchable_text(bill: Bill) -> str:
    """Lower-cased corpus for free-text matching.

    Includes the derived meaningful name alongside the raw titles it comes
    from; the overlap is kept so search behaves the same as the card labels.
    """
    parts = [
        bill.bill_number,
        bill.short_title,
        bill.full_title,
        bill.abstract,
        meaningful_name(bill),
        *bill.sponsor_names,
    ]
    return " ".join(parts).lower()


def matches_search(bill: Bill, terms: Iterable[str]) -> bool:
    terms = list(terms)
    if not terms:
        return True
    corpus = searchable_text(bill)
    return all(term in corpus for term in terms)


def matches_topics(bill: Bill, topics: frozenset[str]) -> bool:
    if not topics:
        return True
    return not topics.isdisjoint(bill.topics)


def matches_sponsors(bill: Bill, sponsors: frozenset[str]) -> bool:
    if not sponsors:
        return True
    return not sponsors.isdisjoint(bill.sponsor_names)


def matches_status(bill: Bill, status: str | None) -> bool:
    if not status:
        return True
    return bill.status == status


def matches(bill: Bill, state: FilterState) -> bool:
    """True when *bill* passes every active facet of *state*."""
    return (
        matches_search(bill, state.search_terms)
        and matches_topics(bill, state.topics)
        and matches_sponsors(bill, state.sponsors)
        and matches_status(bill, state.status)
    )


def filter_bills(bills: Iterable[Bill], state: FilterState) -> tuple[Bill, ...]:
    """Stable filter: matching bills in their original order."""
    if state.is_empty:
        return tuple(bills)
    return tuple(b for b in bills if matches(b, state))
