"""
screening.utils.config - Unified configuration management

Handles:
- Session settings from the environment (SCREENING_* variables)
- GUI preferences in data/config.json (fps, sort mode, start timecode,
  export folder). Markers themselves are never written here.
"""

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Any, Optional

from ..timecode.codec import is_valid_timecode
from .env import load_env, get_env_str, get_env_int, get_env_bool
from .exceptions import ConfigError
from .paths import CONFIG_PATH, EXPORT_DIR

LOG = logging.getLogger(__name__)

DEFAULT_FPS = 24
DEFAULT_START_TIMECODE = "01:00:00:00"
DEFAULT_SORT_MODE = "timecode"
SORT_MODES = ("created", "timecode")
DEFAULT_TICK_INTERVAL_MS = 16
FPS_CHOICES = (24, 25, 30)


@dataclass
class SessionSettings:
    """Settings for one screening session."""

    fps: int = DEFAULT_FPS
    start_timecode: str = DEFAULT_START_TIMECODE
    sort_mode: str = DEFAULT_SORT_MODE
    export_dir: str = str(EXPORT_DIR)

    # Scheduler refresh interval used by the desktop shell
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    allow_fps_change_while_playing: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if int(self.fps) <= 0:
            raise ConfigError(f"fps must be a positive integer, got {self.fps!r}")
        if int(self.tick_interval_ms) <= 0:
            raise ConfigError(
                f"tick_interval_ms must be positive, got {self.tick_interval_ms!r}"
            )
        self.fps = int(self.fps)
        self.tick_interval_ms = int(self.tick_interval_ms)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "fps": self.fps,
            "start_timecode": self.start_timecode,
            "sort_mode": self.sort_mode,
            "export_dir": self.export_dir,
            "tick_interval_ms": self.tick_interval_ms,
            "allow_fps_change_while_playing": self.allow_fps_change_while_playing,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionSettings":
        """Create from dictionary, unknown keys ignored."""
        return cls(
            fps=data.get("fps", DEFAULT_FPS),
            start_timecode=data.get("start_timecode", DEFAULT_START_TIMECODE),
            sort_mode=data.get("sort_mode", DEFAULT_SORT_MODE),
            export_dir=data.get("export_dir", str(EXPORT_DIR)),
            tick_interval_ms=data.get("tick_interval_ms", DEFAULT_TICK_INTERVAL_MS),
            allow_fps_change_while_playing=bool(
                data.get("allow_fps_change_while_playing", False)
            ),
            log_level=data.get("log_level", "INFO"),
        )

    @classmethod
    def from_env(cls) -> "SessionSettings":
        """Create settings from environment variables (.env is loaded first)."""
        load_env()
        return cls(
            fps=get_env_int("SCREENING_FPS", DEFAULT_FPS),
            start_timecode=get_env_str("SCREENING_START_TC", DEFAULT_START_TIMECODE),
            sort_mode=get_env_str("SCREENING_SORT_MODE", DEFAULT_SORT_MODE),
            export_dir=get_env_str("SCREENING_EXPORT_DIR", str(EXPORT_DIR)),
            tick_interval_ms=get_env_int("SCREENING_TICK_MS", DEFAULT_TICK_INTERVAL_MS),
            allow_fps_change_while_playing=get_env_bool(
                "SCREENING_ALLOW_FPS_CHANGE_WHILE_PLAYING", False
            ),
            log_level=get_env_str("SCREENING_LOG_LEVEL", "INFO"),
        )


class ConfigManager:
    """
    GUI preference store backed by a JSON file.

    Only keys listed in PREFERENCE_KEYS are kept; anything else in the
    file is ignored on load.
    """

    PREFERENCE_KEYS = ("fps", "sort_mode", "start_timecode", "export_dir")

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize ConfigManager.

        Args:
            config_path: JSON file path (default: DATA_DIR/config.json)
        """
        self.config_path = Path(config_path) if config_path else CONFIG_PATH

    def read_gui_config(self) -> Dict[str, Any]:
        """Read GUI preferences; an unreadable file yields an empty dict."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            LOG.warning("Cannot read %s: %s", self.config_path, e)
            return {}

        if not isinstance(data, dict):
            LOG.warning("Ignoring %s: top level is not an object", self.config_path)
            return {}

        return {k: v for k, v in data.items() if k in self.PREFERENCE_KEYS}

    def write_gui_config(self, config: Dict[str, Any]) -> bool:
        """Write GUI preferences. Returns False if the file cannot be written."""
        payload = {k: v for k, v in config.items() if k in self.PREFERENCE_KEYS}
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            LOG.warning("Cannot write %s: %s", self.config_path, e)
            return False
        return True

    def apply_to(self, settings: SessionSettings) -> SessionSettings:
        """
        Overlay saved preferences on top of settings.

        Returns:
            A new SessionSettings; invalid saved values are skipped.
            A start timecode out of range for the resulting fps falls
            back to the base one, then to DEFAULT_START_TIMECODE.
        """
        merged = settings.to_dict()
        for key, value in self.read_gui_config().items():
            merged[key] = value
        try:
            result = SessionSettings.from_dict(merged)
        except (ConfigError, TypeError, ValueError) as e:
            LOG.warning("Ignoring saved preferences: %s", e)
            result = settings

        if str(result.sort_mode).strip().lower() not in SORT_MODES:
            LOG.warning("Ignoring saved sort mode %r", result.sort_mode)
            result = replace(result, sort_mode=DEFAULT_SORT_MODE)

        if not is_valid_timecode(result.start_timecode, result.fps):
            LOG.warning(
                "Ignoring start timecode %r at %d fps", result.start_timecode, result.fps
            )
            fallback = settings.start_timecode
            if not is_valid_timecode(fallback, result.fps):
                fallback = DEFAULT_START_TIMECODE
            result = replace(result, start_timecode=fallback)
        return result
