import pyperclip
import pytest

from screening.export.exporter import MarkerExporter, sanitize_file_stem
from screening.utils.exceptions import ExportError


@pytest.fixture
def exporter(engine, tmp_path, name_requester, notifier, sharer, clipboard):
    return MarkerExporter(
        engine,
        request_name=name_requester,
        notify=notifier,
        share=sharer,
        copy_text=clipboard,
        export_dir=tmp_path / "exports",
    )


def _fill(engine):
    engine.capture_marker("start")
    engine.adjust_by_seconds(5)
    engine.capture_marker("intro")


def test_empty_ledger_only_notifies(exporter, tmp_path, name_requester, notifier, sharer, clipboard):
    assert exporter.export_text() is None
    assert exporter.export_document() is None
    assert exporter.copy_to_clipboard() is False

    assert name_requester.calls == []
    assert sharer.calls == []
    assert clipboard.calls == []
    assert not (tmp_path / "exports").exists()
    assert notifier.calls == [
        ("Export", "No markers to export."),
        ("Export", "No markers to export."),
        ("Export", "No markers to copy."),
    ]


def test_export_text_writes_and_shares(exporter, engine, name_requester, sharer):
    _fill(engine)
    path = exporter.export_text()

    assert name_requester.calls == [("markers_24fps",)]
    assert path.name == "session one.txt"
    assert path.read_text(encoding="utf-8") == "#01 [00:00:00:00] start\n#02 [00:00:05:00] intro"
    assert sharer.calls == [(path, "text/plain")]


def test_export_text_blank_name_uses_default(exporter, engine, name_requester):
    _fill(engine)
    name_requester.result = "   "
    assert exporter.export_text().name == "markers_24fps.txt"


def test_explicit_file_name_skips_prompt(exporter, engine, name_requester):
    _fill(engine)
    path = exporter.export_text(file_name="notes.txt")
    assert name_requester.calls == []
    assert path.name == "notes.txt"


def test_export_document(exporter, engine, name_requester, sharer):
    _fill(engine)
    engine.set_sort_mode("created")
    name_requester.result = None
    path = exporter.export_document()

    assert name_requester.calls == [("markers_24fps_created",)]
    assert path.name == "markers_24fps_created.html"
    html = path.read_text(encoding="utf-8")
    assert "Sort: created &bull; Total: 2" in html
    assert sharer.calls == [(path, "text/html")]


def test_export_document_custom_renderer(engine, tmp_path):
    _fill(engine)
    rendered = []
    exporter = MarkerExporter(
        engine,
        render_document=lambda html, target: rendered.append((html, target)),
        export_dir=tmp_path,
    )
    path = exporter.export_document(file_name="report")
    assert rendered[0][1] == path
    assert path.suffix == ".html"


def test_render_failure_raises_export_error(engine, tmp_path):
    _fill(engine)

    def broken(html, target):
        raise OSError("disk full")

    exporter = MarkerExporter(engine, render_document=broken, export_dir=tmp_path)
    with pytest.raises(ExportError) as exc:
        exporter.export_document(file_name="x")
    assert exc.value.operation == "render"


def test_copy_to_clipboard(exporter, engine, clipboard, notifier):
    _fill(engine)
    assert exporter.copy_to_clipboard() is True
    assert clipboard.calls == [("#01 [00:00:00:00] start\n#02 [00:00:05:00] intro",)]
    assert notifier.calls == [("Copied", "Markers copied to the clipboard.")]


def test_clipboard_unavailable(engine, tmp_path):
    _fill(engine)

    def no_clipboard(text):
        raise pyperclip.PyperclipException("no backend")

    exporter = MarkerExporter(engine, copy_text=no_clipboard, export_dir=tmp_path)
    with pytest.raises(ExportError):
        exporter.copy_to_clipboard()


@pytest.mark.parametrize(
    "name, expected",
    [
        (None, "fallback"),
        ("", "fallback"),
        ("  take 2  ", "take 2"),
        ("a/b\\c", "a_b_c"),
        ("report.PDF", "report"),
        ("notes.txt", "notes"),
    ],
)
def test_sanitize_file_stem(name, expected):
    assert sanitize_file_stem(name, "fallback") == expected


def _fill_out_of_order(engine):
    engine.adjust_by_seconds(5)
    engine.capture_marker("late")
    engine.adjust_by_seconds(-5)
    engine.capture_marker("early")


def test_snapshot_is_not_affected_by_later_session_changes(exporter, engine):
    _fill_out_of_order(engine)
    snap = exporter.snapshot()

    engine.set_sort_mode("created")
    engine.change_fps(30)
    engine.capture_marker("after click")

    path = exporter.write_text(snap, "frozen")
    assert path.read_text(encoding="utf-8") == "#01 [00:00:00:00] early\n#02 [00:00:05:00] late"
    assert snap.text_name == "markers_24fps"


def test_document_snapshot_keeps_sort_and_fps(exporter, engine):
    _fill_out_of_order(engine)
    snap = exporter.snapshot()

    engine.set_sort_mode("created")
    engine.change_fps(25)

    path = exporter.write_document(snap, "")
    assert path.name == "markers_24fps_timecode.html"
    html = path.read_text(encoding="utf-8")
    assert "Sort: timecode &bull; Total: 2" in html
    assert html.index("early") < html.index("late")
    assert "00:00:05:00" in html


def test_copy_snapshot_uses_click_time_fps(exporter, engine, clipboard):
    _fill_out_of_order(engine)
    snap = exporter.snapshot()
    engine.change_fps(30)

    assert exporter.copy_snapshot(snap) is True
    assert clipboard.calls == [("#01 [00:00:00:00] early\n#02 [00:00:05:00] late",)]


def test_empty_snapshot_notifies(exporter, notifier):
    assert exporter.snapshot() is None
    assert notifier.calls == [("Export", "No markers to export.")]
