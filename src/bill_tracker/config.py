"""Centralized configuration for the bill tracker.

All settings live here so they can be overridden by environment variables or a
``.env`` file without touching source code.

**Profile system:** Set ``BILL_TRACKER_PROFILE=dev`` (default) or
``BILL_TRACKER_PROFILE=prod`` to get sensible defaults for each environment.
Any individual ``BILL_TRACKER_*`` var still overrides the profile value.

Usage::

    from bill_tracker.config import API_BASE_URL, PAGE_SIZE
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from current working directory
load_dotenv()

LOGGER = logging.getLogger(__name__)

# ── Profile: one knob for the whole environment ──────────────────────────────
# "dev" = local backend, unbounded result cache.
# "prod" = bounded result cache sized like the browser cache manager.

PROFILE: str = os.getenv("BILL_TRACKER_PROFILE", "dev").lower().strip()

_PROFILE_DEFAULTS: dict[str, dict[str, str]] = {
    "dev": {
        "BILL_TRACKER_API_URL": "http://localhost:3000",
        "BILL_TRACKER_CACHE_MAX_ENTRIES": "0",
        "BILL_TRACKER_MAX_RETRIES": "1",
    },
    "prod": {
        "BILL_TRACKER_API_URL": "",  # empty → must be explicitly set
        "BILL_TRACKER_CACHE_MAX_ENTRIES": "100",
        "BILL_TRACKER_MAX_RETRIES": "3",
    },
}

if PROFILE not in _PROFILE_DEFAULTS:
    LOGGER.warning("Unknown BILL_TRACKER_PROFILE=%r, falling back to 'dev'.", PROFILE)
    PROFILE = "dev"

_defaults = _PROFILE_DEFAULTS[PROFILE]


def _env(key: str, fallback: str = "") -> str:
    """Read an env var, falling back to profile default then *fallback*."""
    return os.getenv(key, _defaults.get(key, fallback))


def _env_int(key: str, fallback: int) -> int:
    raw = _env(key, str(fallback)).strip()
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer %s=%r, using %d.", key, raw, fallback)
        return fallback


def _env_float(key: str, fallback: float) -> float:
    raw = _env(key, str(fallback)).strip()
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-numeric %s=%r, using %s.", key, raw, fallback)
        return fallback


# ── Backend ──────────────────────────────────────────────────────────────────
API_BASE_URL: str = _env("BILL_TRACKER_API_URL").strip().rstrip("/")
REQUEST_TIMEOUT_SECONDS: float = _env_float("BILL_TRACKER_REQUEST_TIMEOUT", 10.0)
MAX_RETRIES: int = _env_int("BILL_TRACKER_MAX_RETRIES", 3)

# ── Browsing ─────────────────────────────────────────────────────────────────
# Narrow viewports may pass a smaller page size (6-8) to the paginator.
PAGE_SIZE: int = _env_int("BILL_TRACKER_PAGE_SIZE", 10)
# 300ms quiet period for keystrokes; facet selections are applied immediately.
SEARCH_DEBOUNCE_SECONDS: float = _env_float("BILL_TRACKER_SEARCH_DEBOUNCE", 0.3)
# 0 = unbounded for the session; >0 enables LRU eviction.
CACHE_MAX_ENTRIES: int = _env_int("BILL_TRACKER_CACHE_MAX_ENTRIES", 0)

# ── Production guard ─────────────────────────────────────────────────────────
if PROFILE == "prod" and not API_BASE_URL:
    LOGGER.warning(
        "BILL_TRACKER_PROFILE=prod but BILL_TRACKER_API_URL is empty. "
        "Bill fetches will fail until it is set."
    )
