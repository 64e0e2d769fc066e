"""Windowed "load more" pagination over a filtered result.

The visible window is always a prefix of the current result: the first
``page_size * page_count`` items, clamped to the result length.  It grows one
page per ``advance()`` and snaps back to one page on ``reset()``.

The paginator cannot tell when the result it windows has changed; the
controller calls ``reset()`` on every filter mutation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class Paginator:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._page_size = _check_page_size(page_size)
        self.page_count = 1

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        """Change the page size (e.g. for a narrow viewport); resets the window."""
        self._page_size = _check_page_size(value)
        self.reset()

    @property
    def window_size(self) -> int:
        return self._page_size * self.page_count

    def visible_count(self, total: int) -> int:
        return min(self.window_size, max(total, 0))

    def visible_slice(self, items: Sequence[T]) -> Sequence[T]:
        """First ``visible_count`` elements of *items*, order preserved."""
        return items[: self.visible_count(len(items))]

    def has_more(self, total: int) -> bool:
        return self.window_size < total

    def advance(self, total: int | None = None) -> bool:
        """Grow the window by one page.

        With *total* given, this is a no-op once everything is visible, so
        repeated calls past the end never inflate the page count.  Returns
        True when the window grew.
        """
        if total is not None and not self.has_more(total):
            return False
        self.page_count += 1
        return True

    def reset(self) -> None:
        self.page_count = 1

    def __repr__(self) -> str:
        return f"Paginator(page_size={self._page_size}, page_count={self.page_count})"


def _check_page_size(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"page_size must be a positive integer, got {value!r}")
    return value
