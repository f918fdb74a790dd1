"""
screening.timecode.codec - Frame count <-> HH:MM:SS:FF conversion

Non-drop-frame only. Every field is zero-padded to two digits; the hours
field keeps growing past 99 (100:00:00:00) instead of wrapping.

decode() is deliberately lenient: malformed text yields frame 0 instead
of an exception, callers rely on that.
"""

import math
import re
from fractions import Fraction
from typing import Any

from ..utils.exceptions import ValidationError

_FIELD_RE = re.compile(r"\s*(\d+)\s*", re.ASCII)


def _check_fps(fps: Any) -> int:
    if isinstance(fps, bool) or not isinstance(fps, int) or fps <= 0:
        raise ValidationError(f"fps must be a positive integer, got {fps!r}")
    return fps


def encode(frame_index: int, fps: int) -> str:
    """
    Render a frame index as a timecode.

    Args:
        frame_index: Zero-based frame count (negative values clamp to 0)
        fps: Frames per second

    Returns:
        "HH:MM:SS:FF"

    Example:
        >>> encode(120, 24)
        '00:00:05:00'
    """
    fps = _check_fps(fps)
    f = max(0, int(frame_index))

    ff = f % fps
    total_seconds = f // fps
    ss = total_seconds % 60
    total_minutes = total_seconds // 60
    mm = total_minutes % 60
    hh = total_minutes // 60

    return f"{hh:02d}:{mm:02d}:{ss:02d}:{ff:02d}"


def decode(tc: Any, fps: int) -> int:
    """
    Parse a timecode back into a frame index.

    Returns 0 when tc does not have exactly four unsigned integer fields.
    Field ranges are not checked here ("00:00:00:99" at 24 fps is 99);
    use is_valid_timecode() for input validation.
    """
    fps = _check_fps(fps)
    if not isinstance(tc, str):
        return 0

    parts = tc.split(":")
    if len(parts) != 4:
        return 0

    values = []
    for part in parts:
        m = _FIELD_RE.fullmatch(part)
        if m is None:
            return 0
        values.append(int(m.group(1)))

    hh, mm, ss, ff = values
    return (hh * 3600 + mm * 60 + ss) * fps + ff


def compose(hh: int, mm: int, ss: int, ff: int) -> str:
    """Build a padded timecode from the start-timecode picker fields (ints or digit strings)."""
    return f"{int(hh):02d}:{int(mm):02d}:{int(ss):02d}:{int(ff):02d}"


def is_valid_timecode(tc: Any, fps: int) -> bool:
    """True when tc is well formed and mm/ss < 60 and ff < fps."""
    fps = _check_fps(fps)
    if not isinstance(tc, str):
        return False
    parts = tc.split(":")
    if len(parts) != 4:
        return False
    if any(_FIELD_RE.fullmatch(p) is None for p in parts):
        return False
    _hh, mm, ss, ff = (int(p) for p in parts)
    return mm < 60 and ss < 60 and ff < fps


# -----------------------------
# Frame / second helpers
# -----------------------------

def round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def seconds_to_frames(seconds: float, fps: int) -> int:
    fps = _check_fps(fps)
    return round_half_up(Fraction(seconds) * fps)


def convert_frames(frames: int, old_fps: int, new_fps: int) -> int:
    """
    Re-express a frame position under another frame rate.

    Keeps the wall-clock position: round(frames / old_fps * new_fps),
    computed exactly and rounded half up.
    """
    old_fps = _check_fps(old_fps)
    new_fps = _check_fps(new_fps)
    if old_fps == new_fps:
        return int(frames)
    return round_half_up(Fraction(int(frames) * new_fps, old_fps))
