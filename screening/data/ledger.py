"""
screening.data.ledger - Ordered marker store

Ids start at 1 and only ever grow: clear() drops the markers but not
the counter, so an id is never handed out twice in a ledger's lifetime.
"""

import logging
from dataclasses import replace
from typing import Iterator, List, Optional, Union

from ..utils.exceptions import ValidationError
from .models import Marker, SortMode

LOG = logging.getLogger(__name__)


class MarkerLedger:
    """Insertion-ordered collection of markers."""

    def __init__(self):
        self._markers: List[Marker] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._markers)

    def __iter__(self) -> Iterator[Marker]:
        return iter(list(self._markers))

    def is_empty(self) -> bool:
        return not self._markers

    def capture(self, frame_index: int) -> Marker:
        """Append a marker with an empty comment at frame_index."""
        frame_index = int(frame_index)
        if frame_index < 0:
            raise ValidationError(f"frame_index must be >= 0, got {frame_index}")

        marker = Marker(id=self._next_id, frame_index=frame_index, comment="")
        self._next_id += 1
        self._markers.append(marker)
        LOG.info("Captured marker #%d at frame %d", marker.id, frame_index)
        return marker

    def get(self, marker_id: int) -> Optional[Marker]:
        for m in self._markers:
            if m.id == marker_id:
                return m
        return None

    def edit_comment(self, marker_id: int, text: str) -> bool:
        """
        Replace the comment of a marker.

        Returns:
            False when no marker has that id
        """
        for i, m in enumerate(self._markers):
            if m.id == marker_id:
                self._markers[i] = replace(m, comment=text or "")
                return True
        LOG.warning("edit_comment: marker #%s not found", marker_id)
        return False

    def list(self, sort_mode: Union[SortMode, str] = SortMode.CREATED) -> List[Marker]:
        """
        Markers in the requested order.

        "created" is insertion order; "timecode" is ascending frame_index.
        sorted() is stable, so markers on the same frame stay in
        insertion order and export numbering is reproducible.
        """
        mode = SortMode.parse(sort_mode)
        if mode is SortMode.TIMECODE:
            return sorted(self._markers, key=lambda m: m.frame_index)
        return list(self._markers)

    def clear(self) -> None:
        """Remove all markers; the id counter keeps counting."""
        count = len(self._markers)
        self._markers.clear()
        LOG.info("Cleared %d marker(s)", count)
