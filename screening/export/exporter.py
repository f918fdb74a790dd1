"""
screening.export.exporter - Export actions (text file, document, clipboard)

Wires the pure formatter to the outside world. Every collaborator is
injected so the host decides how names are asked for, how notices are
shown and how files are shared:

    request_name(default_name) -> str | None
    notify(title, message)
    share(path, mime_type)
    copy_text(text)                       (default: pyperclip.copy)
    render_document(html, target_path)    (default: write the HTML)

With an empty ledger every action only notifies; nothing is formatted,
no name is requested and nothing is written.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import pyperclip

from ..data.models import Marker, SortMode
from ..engine import TimecodeEngine
from ..utils.exceptions import ExportError
from ..utils.paths import EXPORT_DIR
from .formatter import (
    build_plain_text,
    build_table_document,
    default_export_name,
    format_exported_at,
    render_html,
)

LOG = logging.getLogger(__name__)

EMPTY_EXPORT_TITLE = "Export"
EMPTY_EXPORT_MESSAGE = "No markers to export."
EMPTY_COPY_MESSAGE = "No markers to copy."

NameRequester = Callable[[str], Optional[str]]
Notifier = Callable[[str, str], None]
Sharer = Callable[[Path, str], object]


def write_html_document(html: str, target: Path) -> None:
    target.write_text(html, encoding="utf-8")


def sanitize_file_stem(name: Optional[str], default: str) -> str:
    """Trim, drop path separators and a trailing extension; blank -> default."""
    stem = (name or "").strip()
    stem = stem.replace("/", "_").replace("\\", "_")
    for ext in (".txt", ".html", ".pdf"):
        if stem.lower().endswith(ext):
            stem = stem[: -len(ext)]
    stem = stem.strip().strip(".")
    return stem or default


@dataclass(frozen=True)
class ExportSnapshot:
    """Ledger contents and session choices frozen at the moment of the click."""

    markers: Tuple[Marker, ...]
    fps: int
    sort_mode: SortMode
    exported_at: str

    @property
    def text_name(self) -> str:
        return default_export_name(self.fps)

    @property
    def document_name(self) -> str:
        return default_export_name(self.fps, self.sort_mode)


class MarkerExporter:
    """
    Export actions bound to one engine.

    Each action is two steps: snapshot() reads the engine and must run on
    the thread that owns it; write_text(), write_document() and
    copy_snapshot() only use the snapshot and can run in a worker.

    Usage:
        exporter = MarkerExporter(engine, request_name=ask, notify=show)
        path = exporter.export_text()

        snap = exporter.snapshot()
        if snap is not None:
            tasks.submit("export", exporter.write_text, snap, ask(snap.text_name))
    """

    def __init__(
        self,
        engine: TimecodeEngine,
        request_name: Optional[NameRequester] = None,
        notify: Optional[Notifier] = None,
        share: Optional[Sharer] = None,
        copy_text: Callable[[str], None] = pyperclip.copy,
        render_document: Callable[[str, Path], None] = write_html_document,
        export_dir: Union[str, Path, None] = None,
    ):
        self.engine = engine
        self.request_name = request_name
        self.notify = notify or (lambda title, message: LOG.info("%s: %s", title, message))
        self.share = share
        self.copy_text = copy_text
        self.render_document = render_document
        self.export_dir = Path(export_dir) if export_dir else EXPORT_DIR

    # ------------------------------------------------------------------
    # Engine thread
    # ------------------------------------------------------------------
    def snapshot(self, empty_message: str = EMPTY_EXPORT_MESSAGE) -> Optional[ExportSnapshot]:
        """Freeze the ordered markers, or notify and return None when empty."""
        if not self.engine.has_markers():
            self.notify(EMPTY_EXPORT_TITLE, empty_message)
            return None
        return ExportSnapshot(
            markers=tuple(self.engine.markers()),
            fps=self.engine.fps,
            sort_mode=self.engine.sort_mode,
            exported_at=format_exported_at(),
        )

    def _ask_name(self, file_name: Optional[str], default_name: str) -> Optional[str]:
        if file_name is None and self.request_name is not None:
            return self.request_name(default_name)
        return file_name

    def export_text(self, file_name: Optional[str] = None) -> Optional[Path]:
        """
        Snapshot, ask for a name and write the plain-text export.

        Args:
            file_name: Name override; None asks request_name()

        Returns:
            Written path, or None when there was nothing to export
        """
        snap = self.snapshot()
        if snap is None:
            return None
        return self.write_text(snap, self._ask_name(file_name, snap.text_name))

    def export_document(self, file_name: Optional[str] = None) -> Optional[Path]:
        """Snapshot, ask for a name and render the printable document."""
        snap = self.snapshot()
        if snap is None:
            return None
        return self.write_document(snap, self._ask_name(file_name, snap.document_name))

    def copy_to_clipboard(self) -> bool:
        """Copy the plain-text export. Returns False when the ledger is empty."""
        snap = self.snapshot(EMPTY_COPY_MESSAGE)
        if snap is None:
            return False
        return self.copy_snapshot(snap)

    # ------------------------------------------------------------------
    # Any thread
    # ------------------------------------------------------------------
    def _target(self, file_name: Optional[str], default_name: str, extension: str) -> Path:
        stem = sanitize_file_stem(file_name, default_name)
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(
                "Cannot create export folder",
                file_path=str(self.export_dir),
                operation="mkdir",
                details=str(e),
            ) from e
        return self.export_dir / f"{stem}.{extension}"

    def _share(self, path: Path, mime_type: str) -> None:
        if self.share is not None:
            self.share(path, mime_type)

    def write_text(self, snap: ExportSnapshot, file_name: Optional[str] = None) -> Path:
        """Write snap as "#NN [tc] comment" lines; blank name -> default."""
        content = build_plain_text(snap.markers, snap.fps)
        path = self._target(file_name, snap.text_name, "txt")

        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            LOG.error("Text export failed: %s", e)
            raise ExportError(
                "Cannot write text export",
                file_path=str(path),
                operation="write",
                details=str(e),
            ) from e

        LOG.info("Exported %d marker(s) to %s", len(snap.markers), path)
        self._share(path, "text/plain")
        return path

    def write_document(self, snap: ExportSnapshot, file_name: Optional[str] = None) -> Path:
        document = build_table_document(snap.markers, snap.fps, snap.sort_mode, snap.exported_at)
        html = render_html(document)
        path = self._target(file_name, snap.document_name, "html")

        try:
            self.render_document(html, path)
        except OSError as e:
            LOG.error("Document export failed: %s", e)
            raise ExportError(
                "Cannot render export document",
                file_path=str(path),
                operation="render",
                details=str(e),
            ) from e

        LOG.info("Exported document with %d row(s) to %s", document.total, path)
        self._share(path, "text/html")
        return path

    def copy_snapshot(self, snap: ExportSnapshot) -> bool:
        text = build_plain_text(snap.markers, snap.fps)
        try:
            self.copy_text(text)
        except pyperclip.PyperclipException as e:
            LOG.error("Clipboard copy failed: %s", e)
            raise ExportError("Clipboard not available", operation="copy", details=str(e)) from e

        self.notify("Copied", "Markers copied to the clipboard.")
        return True
