import logging
import threading

import pytest
from colorama import Fore, Style

from screening.logging_config import (
    ColoredFormatter,
    LogPanelHandler,
    attach_log_panel,
    create_session_log_file,
    detach_log_panel,
    setup_logging,
)
from screening.timecode.scheduler import TkScheduler
from screening.utils.tasks import BackgroundTasks


def test_submit_returns_future_result():
    tasks = BackgroundTasks(max_workers=1)
    try:
        future = tasks.submit("add", lambda a, b: a + b, 2, 3)
        assert future.result(timeout=5) == 5
    finally:
        tasks.shutdown(wait=True)


def test_failure_stays_on_future():
    tasks = BackgroundTasks(max_workers=1)

    def boom():
        raise RuntimeError("nope")

    try:
        future = tasks.submit("boom", boom)
        with pytest.raises(RuntimeError):
            future.result(timeout=5)
    finally:
        tasks.shutdown(wait=True)


def test_caller_can_cancel_queued_task():
    tasks = BackgroundTasks(max_workers=1)
    gate = threading.Event()
    try:
        first = tasks.submit("blocker", gate.wait, 5)
        queued = tasks.submit("queued", lambda: "ran")
        assert queued.cancel()
        gate.set()
        assert first.result(timeout=5) is True
        assert queued.cancelled()
    finally:
        gate.set()
        tasks.shutdown(wait=True)


def test_submit_after_shutdown_raises():
    tasks = BackgroundTasks()
    tasks.shutdown(wait=True)
    with pytest.raises(RuntimeError):
        tasks.submit("late", lambda: None)


class FakeWidget:
    """Collects after() callbacks instead of running a Tk loop."""

    def __init__(self):
        self.pending = {}
        self._next = 0

    def after(self, ms, fn):
        self._next += 1
        after_id = f"after#{self._next}"
        self.pending[after_id] = fn
        return after_id

    def after_cancel(self, after_id):
        self.pending.pop(after_id, None)

    def fire(self):
        for after_id, fn in list(self.pending.items()):
            self.pending.pop(after_id, None)
            fn()


def test_tk_scheduler_rearms_until_cancelled():
    widget = FakeWidget()
    calls = []
    handle = TkScheduler(widget, interval_ms=16).schedule_repeating(lambda: calls.append(1))

    widget.fire()
    widget.fire()
    assert calls == [1, 1]
    assert len(widget.pending) == 1

    handle.cancel()
    assert widget.pending == {}
    widget.fire()
    assert calls == [1, 1]


def test_log_panel_receives_records():
    lines = []
    handler = attach_log_panel(lines.append)
    try:
        assert isinstance(handler, LogPanelHandler)
        logging.getLogger("screening.test").warning("hello %s", "gui")
    finally:
        detach_log_panel(handler)
    assert "WARNING: hello gui" in lines


def test_setup_logging_writes_session_file(tmp_path):
    log_file = create_session_log_file(tmp_path / "logs")
    assert log_file.parent.is_dir()
    assert log_file.name.startswith("session_")

    lines = []
    panel = attach_log_panel(lines.append)
    root = setup_logging("DEBUG", log_file=log_file, colored=False)
    try:
        assert panel in root.handlers
        logging.getLogger("screening.test").info("to file")
        for handler in root.handlers:
            handler.flush()
        assert "| INFO     | screening.test | to file" in log_file.read_text(encoding="utf-8")
        assert "INFO: to file" in lines
    finally:
        detach_log_panel(panel)
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()


def test_colored_formatter_pads_and_colors_level():
    formatter = ColoredFormatter("%(levelname)s|%(message)s")
    record = logging.makeLogRecord({"levelno": logging.ERROR, "levelname": "ERROR", "msg": "bad"})
    out = formatter.format(record)
    assert out == f"{Fore.RED}ERROR   {Style.RESET_ALL}|bad"
    assert record.levelname == "ERROR"
