"""Terminal rendering of a ``ResultsView`` with rich."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from .controller import ResultsView
from .models import Bill
from .naming import meaningful_name

# Status → rich style, mirroring the card badge colors.
_STATUS_STYLES: dict[str, str] = {
    "Filed": "yellow",
    "In Committee": "blue",
    "Passed": "green",
    "Signed": "bold green",
    "Effective": "bold green",
    "Vetoed": "red",
}


def _plural(count: int, word: str = "bill") -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def results_summary(view: ResultsView) -> str:
    """One-line description of the current result set.

    Distinguishes an empty collection from filters that match nothing.
    """
    if view.is_collection_empty:
        return "No bills available"
    if not view.has_active_filters:
        return f"{_plural(view.filtered_count)} available"
    if view.filtered_count == 0:
        return "No bills found matching your search criteria"
    if view.filtered_count != view.total_count:
        return f"{view.filtered_count} of {view.total_count} total bills matching your filters"
    return f"{_plural(view.filtered_count)} matching your filters"


def window_summary(view: ResultsView) -> str:
    return f"Showing {view.visible_count} of {view.filtered_count}"


def _status_cell(status: str) -> str:
    style = _STATUS_STYLES.get(status)
    return f"[{style}]{status}[/]" if style else status


def bill_row(bill: Bill) -> tuple[str, str, str, str, str]:
    """Card model for one bill: number, label, status, sponsors, topics."""
    return (
        bill.bill_number,
        meaningful_name(bill),
        _status_cell(bill.status),
        ", ".join(bill.sponsor_names),
        ", ".join(bill.topics),
    )


def build_table(view: ResultsView) -> Table:
    table = Table(title=results_summary(view), show_lines=False)
    table.add_column("Bill", style="bold cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Status", no_wrap=True)
    table.add_column("Sponsors", style="dim")
    table.add_column("Topics", style="dim")
    for bill in view.visible:
        table.add_row(*bill_row(bill))
    return table


def render_results(view: ResultsView, console: Console | None = None) -> None:
    console = console or Console()
    if view.filtered_count == 0:
        console.print(f"[bold]{results_summary(view)}[/]")
        if view.has_active_filters:
            console.print(
                "[dim]Try adjusting your search terms or filter criteria to find more bills.[/]"
            )
        return
    console.print(build_table(view))
    hint = " (load more for the next page)" if view.has_more else ""
    console.print(f"[dim]{window_summary(view)}{hint}[/]")
