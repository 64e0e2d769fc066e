from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from bill_tracker.controller import FilterStateController
from bill_tracker.models import Bill, Sponsor

# ── Manual scheduler ──────────────────────────────────────────────────────────


class FakeTimer:
    def __init__(self, when: float, callback: Callable[[], Any]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic stand-in for an asyncio loop's ``call_later``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            self.timers.remove(timer)
            if not timer.cancelled:
                timer.callback()

    @property
    def armed(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


# ── Bill fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def sb1() -> Bill:
    return Bill(id="sb1", bill_number="SB1", status="Filed", topics=("Tax",))


@pytest.fixture
def sb2() -> Bill:
    return Bill(id="sb2", bill_number="SB2", status="Passed", topics=("Health",))


@pytest.fixture
def two_bills(sb1: Bill, sb2: Bill) -> list[Bill]:
    return [sb1, sb2]


@pytest.fixture
def flood_bill() -> Bill:
    return Bill(
        id="tx-sb-7",
        bill_number="SB 7",
        short_title="An Act relating to emergency flood disaster response funding.",
        full_title=(
            "An Act relating to emergency flood disaster response funding; "
            "and providing penalties."
        ),
        abstract="Creates a state fund for flood warning sirens at youth camps.",
        status="Passed",
        sponsors=(Sponsor(name="Charles Perry", district="28"), Sponsor(name="Lois Kolkhorst")),
        topics=("Disaster Preparedness", "Water"),
        official_url="https://capitol.texas.gov/BillLookup/History.aspx?Bill=SB7",
    )


@pytest.fixture
def school_bill() -> Bill:
    return Bill(
        id="tx-sb-12",
        bill_number="SB 12",
        short_title="Relating to parental rights in public school education.",
        abstract="Establishes parental notification requirements for school districts.",
        status="In Committee",
        sponsors=(Sponsor(name="Brandon Creighton", district="4"),),
        topics=("Education",),
    )


@pytest.fixture
def tax_bill() -> Bill:
    return Bill(
        id="tx-sb-4",
        bill_number="SB 4",
        short_title="Relating to the homestead exemption from ad valorem taxation.",
        status="Signed",
        sponsors=(Sponsor(name="Paul Bettencourt", district="7"), Sponsor(name="Charles Perry")),
        topics=("Tax", "Property"),
    )


@pytest.fixture
def health_bill() -> Bill:
    return Bill(
        id="tx-sb-25",
        bill_number="SB 25",
        short_title="Relating to health and nutrition standards.",
        status="Vetoed",
        sponsors=(Sponsor(name="Lois Kolkhorst", district="18"),),
        topics=("Health",),
    )


@pytest.fixture
def sample_bills(
    flood_bill: Bill, school_bill: Bill, tax_bill: Bill, health_bill: Bill
) -> list[Bill]:
    return [flood_bill, school_bill, tax_bill, health_bill]


@pytest.fixture
def numbered_bills() -> list[Bill]:
    """25 filler bills; even numbers are Filed, odd numbers Passed."""
    return [
        Bill(
            id=f"sb{i}",
            bill_number=f"SB {i}",
            short_title=f"Relating to water district number {i}",
            status="Filed" if i % 2 == 0 else "Passed",
            topics=("Water",),
        )
        for i in range(1, 26)
    ]


# ── Raw payload fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def raw_bill() -> dict:
    return {
        "id": "tx-sb-7",
        "billNumber": "SB 7",
        "shortTitle": "Relating to flood warning systems",
        "fullTitle": "An Act relating to flood warning systems at youth camps.",
        "status": "Filed",
        "abstract": "Requires sirens at camps in flood plains.",
        "sponsors": [
            {"name": "Charles Perry", "district": "28", "photoUrl": "/img/perry.jpg"},
            "Lois Kolkhorst",
        ],
        "topics": ["Water", "Disaster Preparedness"],
        "officialUrl": "https://capitol.texas.gov/BillLookup/History.aspx?Bill=SB7",
    }


@pytest.fixture
def raw_payload(raw_bill: dict) -> dict:
    return {
        "success": True,
        "data": [
            raw_bill,
            None,
            {"billNumber": "SB 9", "status": "Passed", "sponsors": None, "topics": "Tax"},
        ],
        "count": 3,
    }


# ── Controller fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def controller(scheduler: FakeScheduler) -> FilterStateController:
    return FilterStateController(page_size=2, debounce_seconds=0.3, scheduler=scheduler)


@pytest.fixture
def loaded_controller(
    controller: FilterStateController, sample_bills: list[Bill]
) -> FilterStateController:
    controller.set_bill_collection(sample_bills)
    return controller
