from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

_RE_WHITESPACE = re.compile(r"\s+")


class BillStatus:
    """Well-known bill statuses.  The set is open: unknown values pass through."""

    FILED = "Filed"
    IN_COMMITTEE = "In Committee"
    PASSED = "Passed"
    VETOED = "Vetoed"
    SIGNED = "Signed"
    EFFECTIVE = "Effective"

    ALL: tuple[str, ...] = (FILED, IN_COMMITTEE, PASSED, VETOED, SIGNED, EFFECTIVE)


@dataclass(frozen=True)
class Sponsor:
    name: str
    district: str | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class Bill:
    id: str  # backend document id; falls back to bill_number
    bill_number: str  # e.g. "SB 123"
    short_title: str = ""
    full_title: str = ""
    abstract: str = ""
    status: str = ""
    sponsors: tuple[Sponsor, ...] = ()
    topics: tuple[str, ...] = ()
    official_url: str | None = None

    @property
    def sponsor_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.sponsors)


def normalize_query(raw: str | None) -> str:
    """Trim, lower-case and collapse internal whitespace of a free-text query."""
    if not raw:
        return ""
    return _RE_WHITESPACE.sub(" ", raw).strip().lower()


def clean_facet_values(values: Iterable[str] | str | None) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(v for v in values if isinstance(v, str) and v)


@dataclass(frozen=True)
class FilterState:
    """Complete filter selection.  Replaced wholesale on every change.

    ``status`` of ``None`` means "any status".  Empty facet sets are no-ops.
    """

    search: str = ""
    topics: frozenset[str] = field(default_factory=frozenset)
    sponsors: frozenset[str] = field(default_factory=frozenset)
    status: str | None = None

    @classmethod
    def create(
        cls,
        search: str | None = "",
        topics: Iterable[str] | None = None,
        sponsors: Iterable[str] | None = None,
        status: str | None = None,
    ) -> FilterState:
        """Build a state from raw UI values, normalizing each field."""
        return cls(
            search=normalize_query(search),
            topics=clean_facet_values(topics),
            sponsors=clean_facet_values(sponsors),
            status=status or None,
        )

    @property
    def search_terms(self) -> list[str]:
        return self.search.split()

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.topics or self.sponsors or self.status)

    @property
    def has_active_filters(self) -> bool:
        return not self.is_empty

    def cache_key(self) -> str:
        """Canonical, order-independent serialization used as the cache key.

        Facet sets are sorted so selection order never yields distinct keys.
        """
        payload = {
            "search": self.search,
            "topics": sorted(self.topics),
            "sponsors": sorted(self.sponsors),
            "status": self.status or "",
        }
        return "search:" + json.dumps(payload, sort_keys=True, separators=(",", ":"))


@dataclass(frozen=True)
class FilteredResult:
    """Bills matching ``state``, in original collection order."""

    state: FilterState
    bills: tuple[Bill, ...] = ()

    def __len__(self) -> int:
        return len(self.bills)

    def __iter__(self):
        return iter(self.bills)

    def __getitem__(self, index):
        return self.bills[index]
