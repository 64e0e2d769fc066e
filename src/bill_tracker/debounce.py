"""Cancellable, last-call-wins debouncing for keystroke-driven updates.

Each ``schedule()`` for a source cancels that source's pending action and arms
a fresh timer; the action runs once, after the quiet period, only if nothing
newer was scheduled for the same source in the meantime.

Timers come from a scheduler exposing ``call_later(delay, callback)`` that
returns a handle with ``cancel()``.  An ``asyncio`` event loop is exactly that,
and it is the default: the running loop is looked up when an action is
scheduled.  Tests pass a manual scheduler instead.

Usage::

    debouncer = Debouncer(0.3)
    debouncer.schedule(lambda: apply_search("flood"), source="search")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

LOGGER = logging.getLogger(__name__)

DEFAULT_SOURCE = "default"


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class ScheduledAction:
    """Handle for one debounced action.  Runs at most once."""

    def __init__(self, action: Callable[[], Any], source: str) -> None:
        self.action = action
        self.source = source
        self.cancelled = False
        self.done = False
        self._timer: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> bool:
        """Stop the action from running.  Returns False if it already ran."""
        if not self.pending:
            return False
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        return True

    def run(self) -> None:
        if not self.pending:
            return
        self.done = True
        if self._timer is not None:
            self._timer.cancel()
        self.action()


class Debouncer:
    def __init__(self, delay: float, scheduler: Scheduler | None = None) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._scheduler = scheduler
        self._pending: dict[str, ScheduledAction] = {}

    def _get_scheduler(self) -> Scheduler:
        if self._scheduler is not None:
            return self._scheduler
        # Raises RuntimeError outside a running event loop.
        return asyncio.get_running_loop()

    def schedule(self, action: Callable[[], Any], source: str = DEFAULT_SOURCE) -> ScheduledAction:
        """Arm *action* for *source*, superseding anything already pending there."""
        self.cancel(source)
        handle = ScheduledAction(action, source)
        handle._timer = self._get_scheduler().call_later(
            self.delay, lambda: self._fire(handle)
        )
        self._pending[source] = handle
        LOGGER.debug("Debounce armed for %r (%.0fms)", source, self.delay * 1000)
        return handle

    def _fire(self, handle: ScheduledAction) -> None:
        if self._pending.get(handle.source) is handle:
            del self._pending[handle.source]
        handle.run()

    def pending(self, source: str = DEFAULT_SOURCE) -> bool:
        handle = self._pending.get(source)
        return handle is not None and handle.pending

    def flush(self, source: str = DEFAULT_SOURCE) -> bool:
        """Run the pending action for *source* now.  Returns True if one ran."""
        handle = self._pending.pop(source, None)
        if handle is None or not handle.pending:
            return False
        handle.run()
        return True

    def cancel(self, source: str = DEFAULT_SOURCE) -> bool:
        """Drop the pending action for *source*.  Returns True if one was dropped."""
        handle = self._pending.pop(source, None)
        if handle is None:
            return False
        cancelled = handle.cancel()
        if cancelled:
            LOGGER.debug("Debounce superseded for %r", source)
        return cancelled

    def cancel_all(self) -> None:
        for source in list(self._pending):
            self.cancel(source)
