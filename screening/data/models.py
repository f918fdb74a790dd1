"""
screening.data.models - Type-safe data classes

Defines data structures for:
- markers captured during a session
- rows and header of the printable export document
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from ..utils.exceptions import ValidationError


class SortMode(str, Enum):
    """Display/export ordering of the marker ledger."""

    CREATED = "created"
    TIMECODE = "timecode"

    @classmethod
    def parse(cls, value: Union["SortMode", str]) -> "SortMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown sort mode: {value!r}",
                details=[m.value for m in cls],
            ) from None

    @property
    def label(self) -> str:
        """Label used in export file names and document headers."""
        return self.value


@dataclass(frozen=True)
class Marker:
    """An annotation tied to a frame index."""

    id: int
    frame_index: int
    comment: str = ""


@dataclass(frozen=True)
class TableRow:
    """One row of the export table."""

    index: int  # 1-based position in the chosen ordering
    timecode: str
    comment: str

    @property
    def label(self) -> str:
        return f"#{self.index:02d}"


@dataclass
class TableDocument:
    """Rows plus header metadata for the printable export."""

    rows: List[TableRow] = field(default_factory=list)
    fps: int = 24
    exported_at: str = ""
    sort_mode: SortMode = SortMode.TIMECODE
    total: int = 0

    def __post_init__(self):
        self.total = len(self.rows)
