"""
screening.utils - Shared utilities for the entire codebase

This module provides:
- Path management (ROOT_DIR, DATA_DIR, EXPORT_DIR, LOGS_DIR)
- Environment variable handling (load_env, get_env_*, get_gemini_api_key)
- Configuration management (SessionSettings, ConfigManager)
- Background tasks (BackgroundTasks)
- Custom exceptions (ScreeningError, ValidationError, etc.)
"""

from .paths import ROOT_DIR, DATA_DIR, EXPORT_DIR, LOGS_DIR, ensure_dir
from .env import (
    load_env,
    get_env_str,
    get_env_int,
    get_env_float,
    get_env_bool,
    get_gemini_api_key,
)
from .config import SessionSettings, ConfigManager, FPS_CHOICES
from .tasks import BackgroundTasks
from .exceptions import (
    ScreeningError,
    ConfigError,
    ValidationError,
    ClockStateError,
    ExportError,
    APIError,
    GeminiError,
    GeminiNetworkError,
)

__all__ = [
    # Paths
    "ROOT_DIR",
    "DATA_DIR",
    "EXPORT_DIR",
    "LOGS_DIR",
    "ensure_dir",
    # Environment
    "load_env",
    "get_env_str",
    "get_env_int",
    "get_env_float",
    "get_env_bool",
    "get_gemini_api_key",
    # Config
    "SessionSettings",
    "ConfigManager",
    "FPS_CHOICES",
    # Tasks
    "BackgroundTasks",
    # Exceptions
    "ScreeningError",
    "ConfigError",
    "ValidationError",
    "ClockStateError",
    "ExportError",
    "APIError",
    "GeminiError",
    "GeminiNetworkError",
]
