"""
screening.timecode.clock - Frame-accurate session clock

While playing, the frame position is recomputed from the wall clock on
every tick:

    frame_index = base_frame + floor(elapsed_ms * fps / 1000)

so late or missed scheduler callbacks never accumulate drift. The base
pair (base_frame, base_wall_clock_ms) is captured on play and again on
every seek or frame-rate change while playing.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .codec import _check_fps, convert_frames, encode, seconds_to_frames
from .scheduler import CancelHandle, Scheduler

LOG = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass(frozen=True)
class TimecodeState:
    """Read-only copy of the clock state."""

    fps: int
    frame_index: int
    running: bool
    base_frame: int
    base_wall_clock_ms: int


class TimecodeClock:
    """
    Two-state clock (Stopped / Playing) measured in frames.

    Args:
        fps: Initial frame rate
        scheduler: Provides the repeating advance callback
        now_ms: Millisecond clock (default: time.monotonic)
        start_frame: Initial frame position
    """

    def __init__(
        self,
        fps: int,
        scheduler: Scheduler,
        now_ms: Callable[[], int] = monotonic_ms,
        start_frame: int = 0,
    ):
        self._fps = _check_fps(fps)
        self._scheduler = scheduler
        self._now_ms = now_ms

        self._frame_index = max(0, int(start_frame))
        self._running = False
        self._base_frame = self._frame_index
        self._base_wall_clock_ms = 0
        self._handle: Optional[CancelHandle] = None

        self._listeners: List[Callable[[int], None]] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def fps(self) -> int:
        return self._fps

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def running(self) -> bool:
        return self._running

    def timecode(self) -> str:
        return encode(self._frame_index, self._fps)

    def snapshot(self) -> TimecodeState:
        return TimecodeState(
            fps=self._fps,
            frame_index=self._frame_index,
            running=self._running,
            base_frame=self._base_frame,
            base_wall_clock_ms=self._base_wall_clock_ms,
        )

    def add_listener(self, callback: Callable[[int], None]) -> None:
        """Call callback(frame_index) whenever the position changes."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[int], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def play(self) -> None:
        """Start (or re-baseline) playback from the current frame."""
        self._rebaseline()
        if self._running:
            return
        self._running = True
        self._handle = self._scheduler.schedule_repeating(self._on_schedule)
        LOG.debug("Clock playing from frame %d @ %d fps", self._frame_index, self._fps)

    def stop(self) -> None:
        """Freeze the position at its last computed value."""
        self._cancel_advance()
        if self._running:
            self._running = False
            LOG.debug("Clock stopped at frame %d", self._frame_index)

    def tick(self, now_ms: int) -> int:
        """
        Recompute the frame position from the wall clock.

        Ignored while stopped. Returns the (possibly unchanged) frame index.
        """
        if not self._running:
            return self._frame_index

        elapsed_ms = max(0, int(now_ms) - self._base_wall_clock_ms)
        frame = self._base_frame + (elapsed_ms * self._fps) // 1000
        self._set_frame(frame)
        return self._frame_index

    def reset(self, start_frame: int = 0) -> None:
        """Force Stopped and jump to start_frame."""
        self.stop()
        self._set_frame(start_frame)
        self._base_frame = self._frame_index

    def adjust_by_seconds(self, delta_seconds: float) -> None:
        """Seek by whole or fractional seconds; never below frame 0."""
        delta_frames = seconds_to_frames(delta_seconds, self._fps)
        self._set_frame(self._frame_index + delta_frames)
        if self._running:
            self._rebaseline()

    def seek(self, frame_index: int) -> None:
        self._set_frame(frame_index)
        if self._running:
            self._rebaseline()

    def change_fps(self, new_fps: int) -> None:
        """
        Switch frame rate keeping the wall-clock-equivalent position.

        frame_index becomes round(frame_index / old_fps * new_fps).
        """
        new_fps = _check_fps(new_fps)
        if new_fps == self._fps:
            return

        old_fps = self._fps
        frame = convert_frames(self._frame_index, old_fps, new_fps)
        self._fps = new_fps
        self._set_frame(frame)
        if self._running:
            self._rebaseline()
        LOG.debug("Clock fps %d -> %d, frame now %d", old_fps, new_fps, self._frame_index)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _on_schedule(self) -> None:
        self.tick(self._now_ms())

    def _rebaseline(self) -> None:
        self._base_frame = self._frame_index
        self._base_wall_clock_ms = int(self._now_ms())

    def _cancel_advance(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _set_frame(self, frame: int) -> None:
        frame = max(0, int(frame))
        if frame == self._frame_index:
            return
        self._frame_index = frame
        for callback in list(self._listeners):
            callback(frame)
