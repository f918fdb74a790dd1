"""
screening.logging_config - Log output for a screening session

One call to setup_logging() at startup routes every "screening.*"
logger to:
- the console, level names colored through colorama
- an optional rotating session file (see create_session_log_file())
- any log panels attached with attach_log_panel()

Modules only do LOG = logging.getLogger(__name__).
"""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, List, Optional

import colorama
from colorama import Fore, Style

from .utils.paths import LOGS_DIR, ensure_dir

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
PANEL_FORMAT = "%(levelname)s: %(message)s"
TIME_FORMAT = "%H:%M:%S"

SESSION_FILE_MAX_BYTES = 2 * 1024 * 1024
SESSION_FILE_BACKUPS = 3

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA,
}

# Gemini SDK transport chatter
QUIET_LOGGERS = ("google", "grpc", "absl", "urllib3", "httpx", "httpcore")


class ColoredFormatter(logging.Formatter):
    """Pads the level name to a fixed width and colors it."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, "")
        shown = logging.makeLogRecord(record.__dict__)
        shown.levelname = f"{color}{record.levelname:<8}{Style.RESET_ALL}"
        return super().formatMessage(shown)


class LogPanelHandler(logging.Handler):
    """Hands each formatted record to a GUI callback (e.g. a Text widget appender)."""

    def __init__(self, sink: Callable[[str], None]):
        super().__init__()
        self.sink = sink
        self.setFormatter(logging.Formatter(PANEL_FORMAT))

    def emit(self, record: logging.LogRecord):
        try:
            self.sink(self.format(record))
        except Exception:
            self.handleError(record)


_panels: List[LogPanelHandler] = []
_colorama_ready = False


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    colored: bool = True,
) -> logging.Logger:
    """
    Configure the root logger; calling it again replaces the console and
    file handlers while attached log panels stay.

    Args:
        level: Level name; unknown names mean INFO
        log_file: Rotating session log, parent folder created on demand
        colored: Color level names on the console

    Returns:
        The root logger
    """
    global _colorama_ready

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    for handler in list(root.handlers):
        if handler not in _panels:
            root.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()

    console = logging.StreamHandler(sys.stdout)
    if colored:
        if not _colorama_ready:
            colorama.init()
            _colorama_ready = True
        console.setFormatter(ColoredFormatter(CONSOLE_FORMAT, TIME_FORMAT))
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, TIME_FORMAT))
    root.addHandler(console)

    if log_file:
        log_file = Path(log_file)
        ensure_dir(log_file.parent)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=SESSION_FILE_MAX_BYTES,
            backupCount=SESSION_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def attach_log_panel(sink: Callable[[str], None]) -> LogPanelHandler:
    handler = LogPanelHandler(sink)
    logging.getLogger().addHandler(handler)
    _panels.append(handler)
    return handler


def detach_log_panel(handler: LogPanelHandler) -> None:
    logging.getLogger().removeHandler(handler)
    if handler in _panels:
        _panels.remove(handler)


def create_session_log_file(logs_dir: Optional[Path] = None) -> Path:
    """logs/session_<YYYYmmdd_HHMMSS>.log; the folder exists afterwards, the file does not."""
    folder = ensure_dir(logs_dir or LOGS_DIR)
    return folder / f"session_{datetime.now():%Y%m%d_%H%M%S}.log"
