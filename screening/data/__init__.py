"""
screening.data - Data models and the marker ledger

Provides:
- Type-safe data classes (Marker, TableRow, TableDocument)
- Sort modes
- MarkerLedger
"""

from .models import (
    SortMode,
    Marker,
    TableRow,
    TableDocument,
)
from .ledger import MarkerLedger

__all__ = [
    # Models
    "SortMode",
    "Marker",
    "TableRow",
    "TableDocument",
    # Ledger
    "MarkerLedger",
]
