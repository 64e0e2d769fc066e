"""Short, human-meaningful labels derived from raw bill titles.

Legislative titles are long and front-loaded with boilerplate ("An Act
relating to ...").  ``summarize_title`` strips that boilerplate, keeps the
first few salient words and tags the result with a topical suffix::

    >>> summarize_title("An Act relating to emergency flood disaster response funding.")
    'Emergency Flood Disaster Safety Act'

The label is shown on result cards and is also part of the free-text search
corpus (see ``filtering.searchable_text``).
"""

from __future__ import annotations

import re

from .models import Bill

UNKNOWN_BILL = "Unknown Bill"

_MAX_WORDS = 3
_MAX_LABEL_LEN = 40
_MAX_FALLBACK_LEN = 30
_ELLIPSIS = "..."

# ── Boilerplate patterns ─────────────────────────────────────────────────────
# Applied once each, in order, so "An Act relating to X" reduces to "X".

_LEADING_BOILERPLATE: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^An Act ",
        r"^relating to ",
        r"^concerning ",
        r"^regarding ",
        r"^amending ",
        r"^creating ",
        r"^establishing ",
        r"^providing for ",
    )
)

_TRAILING_BOILERPLATE: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"; and providing penalties\.?$",
        r"; providing penalties\.?$",
        r"\.$",
    )
)

# ── Word lists ───────────────────────────────────────────────────────────────

STOP_WORDS: frozenset[str] = frozenset(
    {"the", "and", "or", "of", "to", "for", "in", "on", "at", "by", "with", "from", "a", "an"}
)

IMPORTANT_TERMS: frozenset[str] = frozenset(
    {
        "safety", "education", "health", "tax", "budget", "emergency", "disaster",
        "flood", "camp", "school", "medical", "insurance", "transportation",
        "environment", "energy", "water", "housing", "business", "agriculture",
        "technology", "criminal", "justice", "voting", "election", "government",
        "public", "state", "local", "county", "city", "municipal", "appropriations",
        "funding", "grant", "license", "permit", "regulation", "law", "code", "act",
        "bill",
    }
)

_SUFFIX_EXEMPT_WORDS = ("act", "bill", "program", "system")

# First matching group wins; no match → " Act".
_TOPICAL_SUFFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("safety", "emergency", "disaster"), " Safety Act"),
    (("education", "school"), " Education Act"),
    (("tax", "budget", "appropriations"), " Budget Bill"),
    (("health", "medical"), " Health Act"),
)
_DEFAULT_SUFFIX = " Act"


def strip_boilerplate(title: str) -> str:
    """Remove leading/trailing legislative boilerplate from *title*."""
    cleaned = title
    for pattern in _LEADING_BOILERPLATE:
        cleaned = pattern.sub("", cleaned, count=1)
    for pattern in _TRAILING_BOILERPLATE:
        cleaned = pattern.sub("", cleaned, count=1)
    return cleaned.strip()


def _is_salient(word: str) -> bool:
    lower = word.lower()
    if lower in IMPORTANT_TERMS:
        return True
    return len(word) > 2 and lower not in STOP_WORDS


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _topical_suffix(label: str) -> str:
    lower = label.lower()
    if any(word in lower for word in _SUFFIX_EXEMPT_WORDS):
        return ""
    for keywords, suffix in _TOPICAL_SUFFIXES:
        if any(k in lower for k in keywords):
            return suffix
    return _DEFAULT_SUFFIX


def _truncate(text: str, limit: int, keep: int) -> str:
    if len(text) > limit:
        return text[:keep] + _ELLIPSIS
    return text


def summarize_title(title: str) -> str:
    """Derive a short label from a raw title.

    Returns an empty string only when the title has no words left after the
    boilerplate is stripped; ``meaningful_name`` handles that fallback.
    """
    cleaned = strip_boilerplate(title or "")
    words = cleaned.split()

    salient = [w for w in words if _is_salient(w)][:_MAX_WORDS]
    if not salient:
        first_words = " ".join(words[:_MAX_WORDS])
        return _truncate(first_words, _MAX_FALLBACK_LEN, _MAX_FALLBACK_LEN)

    label = " ".join(_capitalize(w) for w in salient)
    label += _topical_suffix(label)
    return _truncate(label, _MAX_LABEL_LEN, _MAX_LABEL_LEN - len(_ELLIPSIS))


def meaningful_name(bill: Bill) -> str:
    """Human-readable label for *bill*; never empty.

    Uses the short title, then the full title.  Falls back to the bill number,
    then to ``"Unknown Bill"``.
    """
    title = bill.short_title or bill.full_title
    if title:
        label = summarize_title(title)
        if label:
            return label
    return bill.bill_number or UNKNOWN_BILL
