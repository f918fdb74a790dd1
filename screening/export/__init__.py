"""
screening.export - Marker export

Provides:
- Pure formatting (plain text, table rows, printable HTML, summary text)
- MarkerExporter: file/clipboard actions with the empty-ledger guard
"""

from .formatter import (
    build_plain_text,
    build_table_rows,
    build_summary_text,
    build_table_document,
    render_html,
    escape_markup,
    default_export_name,
    format_exported_at,
)
from .exporter import MarkerExporter, sanitize_file_stem

__all__ = [
    "build_plain_text",
    "build_table_rows",
    "build_summary_text",
    "build_table_document",
    "render_html",
    "escape_markup",
    "default_export_name",
    "format_exported_at",
    "MarkerExporter",
    "sanitize_file_stem",
]
