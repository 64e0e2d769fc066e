"""HTTP and file sources for the bill collection.

The engine never sees a fetch error: failures are logged here and surfaced
as an empty collection (or ``None`` for a single bill), which the controller
treats as a valid, empty session.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import config
from .models import Bill
from .normalize import normalize_bill, normalize_bills

LOGGER = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


@dataclass
class BillSource:
    base_url: str = field(default_factory=lambda: config.API_BASE_URL)
    timeout_seconds: float = field(default_factory=lambda: config.REQUEST_TIMEOUT_SECONDS)
    max_retries: int = field(default_factory=lambda: config.MAX_RETRIES)
    _session: requests.Session = field(default_factory=requests.Session, repr=False)

    def __post_init__(self) -> None:
        """Configure retry adapter for 429 / 5xx responses."""
        self.base_url = self.base_url.rstrip("/")
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1.0,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    def _get_json(self, path: str) -> Any | None:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.get(url, headers=_JSON_HEADERS, timeout=self.timeout_seconds)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            LOGGER.warning("Failed to fetch %s: %s", url, exc)
        except ValueError as exc:
            LOGGER.warning("Invalid JSON from %s: %s", url, exc)
        return None

    # ── public API ───────────────────────────────────────────────────────

    def fetch_bills(self) -> list[Bill]:
        """GET the bill list.  Returns [] on any failure."""
        payload = self._get_json("/api/bills")
        if payload is None:
            return []
        bills = normalize_bills(payload)
        LOGGER.info("Fetched %d bills from %s", len(bills), self.base_url)
        return bills

    def fetch_bill(self, bill_id: str) -> Bill | None:
        """GET one bill's detail record.  Returns None on any failure."""
        payload = self._get_json(f"/api/bills/{quote(bill_id, safe='')}")
        if isinstance(payload, Mapping):
            for key in ("data", "bill"):
                inner = payload.get(key)
                if isinstance(inner, Mapping):
                    payload = inner
                    break
        return normalize_bill(payload)


def load_bills_file(path: Path | str) -> list[Bill]:
    """Read a saved API response (any supported envelope) from disk.

    Returns [] when the file is missing or unreadable.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning("Failed to read bills from %s: %s", path, exc)
        return []
    bills = normalize_bills(payload)
    LOGGER.info("Loaded %d bills from %s", len(bills), path)
    return bills
