"""Defensive normalization of raw bill payloads at the ingestion boundary.

The backend speaks camelCase JSON (``billNumber``, ``shortTitle``,
``photoUrl``); cached exports may use snake_case.  Both are accepted.

**Collections:** the list endpoint has returned three shapes over time::

    {"data": [...]}     # current API envelope
    {"bills": [...]}    # legacy envelope
    [...]               # bare list

**Bills:** ``None`` / non-mapping records are skipped.  ``sponsors`` and
``topics`` that are missing or not lists become empty tuples.

**Sponsors:** either a bare name string or a mapping with ``name`` and
optional ``district`` / ``photoUrl``.  Entries without a usable name are
dropped, so downstream code never type-checks a sponsor again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .models import Bill, Sponsor

LOGGER = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """Coerce a scalar field to a stripped string; ``None`` and containers become ''."""
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    return _text(value) or None


def _field(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-None value among *keys*."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def normalize_sponsor(raw: Any) -> Sponsor | None:
    """Convert a string or mapping sponsor record into a ``Sponsor``.

    Returns None when no name can be recovered.
    """
    if isinstance(raw, str):
        name = raw.strip()
        return Sponsor(name=name) if name else None
    if isinstance(raw, Mapping):
        name = _text(raw.get("name"))
        if not name:
            return None
        return Sponsor(
            name=name,
            district=_optional_text(raw.get("district")),
            photo_url=_optional_text(_field(raw, "photoUrl", "photo_url")),
        )
    return None


def normalize_bill(raw: Any) -> Bill | None:
    """Convert one raw bill record into an immutable ``Bill``.

    Returns None for null or non-mapping records.
    """
    if not isinstance(raw, Mapping):
        return None

    bill_number = _text(_field(raw, "billNumber", "bill_number"))
    sponsors = tuple(
        s for s in (normalize_sponsor(item) for item in _as_list(raw.get("sponsors"))) if s
    )
    topics = tuple(t for t in (_text(item) for item in _as_list(raw.get("topics"))) if t)

    return Bill(
        id=_text(_field(raw, "id", "_id")) or bill_number,
        bill_number=bill_number,
        short_title=_text(_field(raw, "shortTitle", "short_title")),
        full_title=_text(_field(raw, "fullTitle", "full_title")),
        abstract=_text(raw.get("abstract")),
        status=_text(raw.get("status")),
        sponsors=sponsors,
        topics=topics,
        official_url=_optional_text(_field(raw, "officialUrl", "official_url")),
    )


def unwrap_collection(payload: Any) -> list:
    """Extract the bill list from any of the supported response envelopes."""
    if isinstance(payload, Mapping):
        for key in ("data", "bills"):
            inner = payload.get(key)
            if isinstance(inner, list):
                return inner
        return []
    if isinstance(payload, (list, tuple)):
        return list(payload)
    return []


def normalize_bills(payload: Any) -> list[Bill]:
    """Normalize a raw payload (envelope or list) into a list of ``Bill``.

    Already-normalized ``Bill`` objects pass through unchanged.  Fetch order
    is preserved.
    """
    records: Iterable[Any] = unwrap_collection(payload)
    bills: list[Bill] = []
    skipped = 0
    for record in records:
        if isinstance(record, Bill):
            bills.append(record)
            continue
        bill = normalize_bill(record)
        if bill is None:
            skipped += 1
            continue
        bills.append(bill)

    if skipped:
        LOGGER.warning("Skipped %d malformed bill record(s) during ingestion.", skipped)
    return bills
