"""
screening.engine - One screening session

TimecodeEngine bundles the clock, the marker ledger and the session
choices (start timecode, sort mode). Create one per session and pass it
to whatever needs it; there is no module-level instance.

Resetting the clock and clearing the markers are separate operations.
reset_session() runs both, in that order, for hosts that want the
single "Reset" button behaviour.
"""

import logging
from typing import Callable, List, Optional, Union

from .data.ledger import MarkerLedger
from .data.models import Marker, SortMode
from .timecode.clock import TimecodeClock, monotonic_ms
from .timecode.codec import convert_frames, decode, encode, is_valid_timecode
from .timecode.scheduler import Scheduler
from .utils.config import DEFAULT_START_TIMECODE, SessionSettings
from .utils.exceptions import ClockStateError, ValidationError

LOG = logging.getLogger(__name__)


class TimecodeEngine:
    """
    Session state machine: clock + ledger.

    Args:
        scheduler: Drives the clock while playing
        fps: Initial frame rate
        start_timecode: Position the clock resets to
        sort_mode: Default ordering for listings and exports
        allow_fps_change_while_playing: When False, change_fps() refuses
            while the clock runs
        now_ms: Millisecond clock (injectable for tests)
    """

    def __init__(
        self,
        scheduler: Scheduler,
        fps: int = 24,
        start_timecode: str = DEFAULT_START_TIMECODE,
        sort_mode: Union[SortMode, str] = SortMode.TIMECODE,
        allow_fps_change_while_playing: bool = False,
        now_ms: Callable[[], int] = monotonic_ms,
    ):
        self.clock = TimecodeClock(fps, scheduler, now_ms=now_ms)
        self.ledger = MarkerLedger()
        self.sort_mode = SortMode.parse(sort_mode)
        self.allow_fps_change_while_playing = bool(allow_fps_change_while_playing)

        self._start_timecode = DEFAULT_START_TIMECODE
        self.set_start_timecode(start_timecode)

    @classmethod
    def from_settings(
        cls,
        settings: SessionSettings,
        scheduler: Scheduler,
        now_ms: Callable[[], int] = monotonic_ms,
    ) -> "TimecodeEngine":
        return cls(
            scheduler,
            fps=settings.fps,
            start_timecode=settings.start_timecode,
            sort_mode=settings.sort_mode,
            allow_fps_change_while_playing=settings.allow_fps_change_while_playing,
            now_ms=now_ms,
        )

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------
    @property
    def fps(self) -> int:
        return self.clock.fps

    @property
    def frame_index(self) -> int:
        return self.clock.frame_index

    @property
    def is_playing(self) -> bool:
        return self.clock.running

    @property
    def start_timecode(self) -> str:
        return self._start_timecode

    def current_timecode(self) -> str:
        return self.clock.timecode()

    def play(self) -> None:
        self.clock.play()

    def stop(self) -> None:
        self.clock.stop()

    def adjust_by_seconds(self, delta_seconds: float) -> None:
        self.clock.adjust_by_seconds(delta_seconds)

    def change_fps(self, new_fps: int) -> None:
        """
        Switch the session frame rate.

        Markers keep their absolute frame counts; their timecodes are
        rendered with the new rate from now on. The start timecode is
        converted like the clock position, so it stays in range.
        """
        if self.clock.running and not self.allow_fps_change_while_playing:
            raise ClockStateError("Stop playback before changing fps", state="playing")
        old_fps = self.clock.fps
        start = self.start_frame()
        self.clock.change_fps(new_fps)
        if self.clock.fps != old_fps:
            converted = convert_frames(start, old_fps, self.clock.fps)
            self._start_timecode = encode(converted, self.clock.fps)
        LOG.info("Frame rate set to %d fps (start %s)", self.clock.fps, self._start_timecode)

    def start_frame(self) -> int:
        return decode(self._start_timecode, self.clock.fps)

    def set_start_timecode(self, tc: str) -> None:
        """
        Change the reset position. A stopped clock jumps there at once.

        Raises:
            ValidationError: tc is malformed or out of range for the fps
        """
        if not is_valid_timecode(tc, self.clock.fps):
            raise ValidationError(f"Invalid start timecode: {tc!r}")
        self._start_timecode = encode(decode(tc, self.clock.fps), self.clock.fps)
        if not self.clock.running:
            self.clock.reset(self.start_frame())

    def reset_clock(self, start_frame: Optional[int] = None) -> None:
        """Stop and move to start_frame (default: the start timecode)."""
        if start_frame is None:
            start_frame = self.start_frame()
        self.clock.reset(start_frame)
        LOG.info("Clock reset to %s", self.current_timecode())

    def clear_markers(self) -> None:
        self.ledger.clear()

    def reset_session(self) -> None:
        """Reset the clock, then drop every marker."""
        self.reset_clock()
        self.clear_markers()

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------
    def capture_marker(self, comment: str = "") -> Marker:
        marker = self.ledger.capture(self.clock.frame_index)
        if comment:
            self.ledger.edit_comment(marker.id, comment)
            marker = self.ledger.get(marker.id)
        return marker

    def edit_comment(self, marker_id: int, text: str) -> bool:
        return self.ledger.edit_comment(marker_id, text)

    def set_sort_mode(self, sort_mode: Union[SortMode, str]) -> None:
        self.sort_mode = SortMode.parse(sort_mode)

    def markers(self, sort_mode: Optional[Union[SortMode, str]] = None) -> List[Marker]:
        """Markers in sort_mode order (default: the session sort mode)."""
        return self.ledger.list(self.sort_mode if sort_mode is None else sort_mode)

    def has_markers(self) -> bool:
        return not self.ledger.is_empty()
