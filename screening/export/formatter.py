"""
screening.export.formatter - Pure rendering of marker collections

Nothing here touches the ledger, the clock or the file system: given
the same ordered markers and fps, every function returns the same
output. The caller decides the ordering and refuses empty collections.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Union

from ..data.models import Marker, SortMode, TableDocument, TableRow
from ..timecode.codec import encode

DOCUMENT_TITLE = "Markers Export"

_MARKUP_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_markup(text: str) -> str:
    # & first, otherwise the other entities get double-escaped
    for raw, entity in _MARKUP_ESCAPES:
        text = text.replace(raw, entity)
    return text


def build_plain_text(ordered: Sequence[Marker], fps: int) -> str:
    """
    Plain-text export payload, also used for the clipboard.

    One line per marker: "#NN [HH:MM:SS:FF] comment", NN being the
    1-based position in the given order. Lines are right-trimmed so a
    marker without comment ends at the closing bracket.
    """
    lines = []
    for i, m in enumerate(ordered, start=1):
        tc = encode(m.frame_index, fps)
        comment = (m.comment or "").strip()
        lines.append(f"#{i:02d} [{tc}] {comment}".rstrip())
    return "\n".join(lines)


def build_table_rows(
    ordered: Sequence[Marker],
    fps: int,
    escape: bool = True,
) -> List[TableRow]:
    """
    Rows for the tabular document.

    Args:
        ordered: Markers in export order
        fps: Frame rate used for the timecode column
        escape: Escape & < > " ' in timecode and comment (markup targets)
    """
    rows = []
    for i, m in enumerate(ordered, start=1):
        tc = encode(m.frame_index, fps)
        comment = (m.comment or "").strip()
        if escape:
            tc = escape_markup(tc)
            comment = escape_markup(comment)
        rows.append(TableRow(index=i, timecode=tc, comment=comment))
    return rows


def build_summary_text(ordered: Iterable[Marker], fps: int) -> str:
    """Lines of "[HH:MM:SS:FF] comment" sent to the summary service."""
    return "\n".join(
        f"[{encode(m.frame_index, fps)}] {m.comment or ''}" for m in ordered
    )


def format_exported_at(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now()
    return moment.strftime("%d %b %Y, %H:%M")


def build_table_document(
    ordered: Sequence[Marker],
    fps: int,
    sort_mode: Union[SortMode, str],
    exported_at: str,
) -> TableDocument:
    """Escaped rows plus header metadata."""
    return TableDocument(
        rows=build_table_rows(ordered, fps, escape=True),
        fps=fps,
        exported_at=exported_at,
        sort_mode=SortMode.parse(sort_mode),
    )


def default_export_name(fps: int, sort_mode: Optional[Union[SortMode, str]] = None) -> str:
    """
    markers_{fps}fps for the text export,
    markers_{fps}fps_{sort label} for the document.
    """
    name = f"markers_{fps}fps"
    if sort_mode is not None:
        name = f"{name}_{SortMode.parse(sort_mode).label}"
    return name


# =====================================================================
# PRINTABLE DOCUMENT
# =====================================================================

_HTML_STYLE = """
      @page { size: A4; margin: 22mm 14mm 18mm 14mm; }
      body {
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
        color: #111;
        font-size: 12px;
      }
      .header { display: flex; justify-content: space-between; align-items: flex-end; margin-bottom: 10px; }
      .title { font-size: 16px; font-weight: 800; margin: 0; }
      .subtitle { font-size: 11px; color: #555; margin-top: 4px; }
      .meta { text-align: right; font-size: 10.5px; color: #555; line-height: 1.25; }
      table { width: 100%; border-collapse: collapse; table-layout: fixed; }
      thead th { background: #f2f2f2; border-bottom: 1px solid #d8d8d8; padding: 8px; font-weight: 800; text-align: left; }
      tbody td { border-bottom: 1px solid #e6e6e6; padding: 8px; vertical-align: top; }
      tbody tr:nth-child(even) td { background: #fafafa; }
      .num { width: 52px; white-space: nowrap; font-weight: 800; }
      .tc { width: 105px; white-space: nowrap; font-weight: 800; }
      .cmt { width: auto; white-space: pre-wrap; word-break: break-word; }
      tr { page-break-inside: avoid; }
      .footer { position: fixed; bottom: -10mm; left: 0; right: 0; font-size: 10px; color: #666;
                display: flex; justify-content: space-between; align-items: center; }
      .pagecount::after { content: "Page " counter(page) " / " counter(pages); }
"""


def render_html(document: TableDocument) -> str:
    """
    Render the document as printable A4 HTML.

    Row values are expected to be escaped already (build_table_document
    does it); header values are escaped here.
    """
    body_rows = "".join(
        "\n        <tr>"
        f'<td class="num">{row.label}</td>'
        f'<td class="tc">{row.timecode}</td>'
        f'<td class="cmt">{row.comment}</td>'
        "</tr>"
        for row in document.rows
    )
    subtitle = (
        f"Sort: {escape_markup(document.sort_mode.label)}"
        f" &bull; Total: {len(document.rows)}"
    )

    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{DOCUMENT_TITLE}</title>
    <style>{_HTML_STYLE}    </style>
  </head>
  <body>
    <div class="header">
      <div>
        <h1 class="title">{DOCUMENT_TITLE}</h1>
        <div class="subtitle">{subtitle}</div>
      </div>
      <div class="meta">
        <div><b>FPS:</b> {escape_markup(str(document.fps))}</div>
        <div><b>Export:</b> {escape_markup(document.exported_at)}</div>
      </div>
    </div>
    <table>
      <thead>
        <tr><th style="width:52px;">#</th><th style="width:105px;">Timecode</th><th>Comment</th></tr>
      </thead>
      <tbody>{body_rows}
      </tbody>
    </table>
    <div class="footer">
      <div>{DOCUMENT_TITLE}</div>
      <div class="pagecount"></div>
    </div>
  </body>
</html>
"""
