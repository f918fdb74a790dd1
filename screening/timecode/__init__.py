"""
screening.timecode - Timecode codec, session clock and schedulers
"""

from .codec import (
    encode,
    decode,
    compose,
    is_valid_timecode,
    seconds_to_frames,
    convert_frames,
)
from .clock import TimecodeClock, TimecodeState
from .scheduler import Scheduler, CancelHandle, TkScheduler, ManualScheduler

__all__ = [
    "encode",
    "decode",
    "compose",
    "is_valid_timecode",
    "seconds_to_frames",
    "convert_frames",
    "TimecodeClock",
    "TimecodeState",
    "Scheduler",
    "CancelHandle",
    "TkScheduler",
    "ManualScheduler",
]
