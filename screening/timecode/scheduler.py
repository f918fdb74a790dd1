"""
screening.timecode.scheduler - Repeating callback capability

The clock never owns its timer. It is handed a Scheduler and asks it to
run a callback roughly once per refresh interval:

    handle = scheduler.schedule_repeating(callback)
    ...
    handle.cancel()

TkScheduler drives the callback from the Tk event loop; ManualScheduler
runs callbacks only when told to, for deterministic tests.
"""

import logging
from typing import Callable, Dict, Optional

LOG = logging.getLogger(__name__)


class CancelHandle:
    """Returned by schedule_repeating(); cancel() is idempotent."""

    def __init__(self, on_cancel: Callable[[], None]):
        self._on_cancel = on_cancel
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._on_cancel()


class Scheduler:
    """Interface for repeating callbacks."""

    def schedule_repeating(self, callback: Callable[[], None]) -> CancelHandle:
        raise NotImplementedError


class TkScheduler(Scheduler):
    """
    Repeats a callback with widget.after(), re-arming after each run.

    Args:
        widget: Any Tk widget (usually the root window)
        interval_ms: Delay between runs; ~16 ms matches a 60 Hz refresh
    """

    def __init__(self, widget, interval_ms: int = 16):
        self.widget = widget
        self.interval_ms = max(1, int(interval_ms))

    def schedule_repeating(self, callback: Callable[[], None]) -> CancelHandle:
        state: Dict[str, Optional[str]] = {"after_id": None}

        def _run():
            state["after_id"] = None
            if handle.cancelled:
                return
            callback()
            if not handle.cancelled:
                state["after_id"] = self.widget.after(self.interval_ms, _run)

        def _cancel():
            if state["after_id"] is not None:
                self.widget.after_cancel(state["after_id"])
                state["after_id"] = None

        handle = CancelHandle(_cancel)
        state["after_id"] = self.widget.after(self.interval_ms, _run)
        return handle


class ManualScheduler(Scheduler):
    """
    Deterministic scheduler: callbacks run only on run_pending().

    Usage:
        scheduler = ManualScheduler()
        clock = TimecodeClock(24, scheduler, now_ms=fake_now)
        clock.play()
        scheduler.run_pending()
    """

    def __init__(self):
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._next_key = 0

    @property
    def active_count(self) -> int:
        return len(self._callbacks)

    def schedule_repeating(self, callback: Callable[[], None]) -> CancelHandle:
        key = self._next_key
        self._next_key += 1
        self._callbacks[key] = callback
        return CancelHandle(lambda: self._callbacks.pop(key, None))

    def run_pending(self) -> int:
        """Run every active callback once. Returns how many ran."""
        ran = 0
        for key, callback in list(self._callbacks.items()):
            # a callback may cancel another one mid-iteration
            if key in self._callbacks:
                callback()
                ran += 1
        return ran
