#!/usr/bin/env python3
"""Browse bills from the terminal with the same filter engine the UI uses.

Loads the collection once (from the API or a saved JSON response), applies
the requested filters, and prints the visible window.

Usage::

    python scripts/browse.py                              # all bills, first page
    python scripts/browse.py --search "flood relief"      # AND of substrings
    python scripts/browse.py --topic Tax --topic Health   # OR within a facet
    python scripts/browse.py --status Passed --pages 3    # three "load more" pages
    python scripts/browse.py --file bills.json --facets   # list topic/sponsor options
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console

# Ensure the project is importable
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from bill_tracker.client import BillSource, load_bills_file  # noqa: E402
from bill_tracker.controller import FilterStateController  # noqa: E402
from bill_tracker.models import Bill  # noqa: E402
from bill_tracker.render import render_results  # noqa: E402

console = Console()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search and filter legislative bills.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="Backend base URL (default: BILL_TRACKER_API_URL)")
    source.add_argument("--file", type=Path, help="Saved /api/bills JSON response")
    parser.add_argument("--search", "-s", default="", help="Free-text query")
    parser.add_argument("--topic", action="append", default=[], help="Topic (repeatable)")
    parser.add_argument("--sponsor", action="append", default=[], help="Sponsor (repeatable)")
    parser.add_argument("--status", default=None, help="Exact status, e.g. Passed")
    parser.add_argument("--page-size", type=int, default=None, help="Bills per page")
    parser.add_argument("--pages", type=int, default=1, help="Pages to show")
    parser.add_argument("--facets", action="store_true", help="List topic and sponsor options")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> list[Bill]:
    if args.file is not None:
        return load_bills_file(args.file)
    source = BillSource(base_url=args.url) if args.url else BillSource()
    return source.fetch_bills()


async def _browse(args: argparse.Namespace) -> None:
    controller = FilterStateController(page_size=args.page_size)
    controller.set_bill_collection(_load(args))

    if args.facets:
        console.print(f"[bold]Topics:[/] {', '.join(controller.topic_options) or '(none)'}")
        console.print(f"[bold]Sponsors:[/] {', '.join(controller.sponsor_options) or '(none)'}")

    if args.topic:
        controller.set_facet("topics", args.topic)
    if args.sponsor:
        controller.set_facet("sponsors", args.sponsor)
    if args.status:
        controller.set_facet("status", args.status)
    if args.search:
        controller.set_text_query(args.search)
        controller.flush()

    for _ in range(max(args.pages, 1) - 1):
        if not controller.load_more():
            break

    render_results(controller.snapshot(), console)

    stats = controller.cache.stats()
    logging.getLogger(__name__).debug(
        "Result cache: %d entries, %d hits, %d misses", stats.entries, stats.hits, stats.misses
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%H:%M:%S",
    )
    asyncio.run(_browse(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
