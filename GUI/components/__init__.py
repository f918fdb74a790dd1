"""
GUI.components - Reusable UI components

This module provides:
- Theme/style constants
- Widget configuration helpers
"""

from .styles import (
    DARK_BG,
    DARK_BG_CARD,
    DARK_SURFACE,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
    PRIMARY,
    DANGER,
    SUMMARY_BG,
    init_dark_theme,
    get_text_config,
)

__all__ = [
    "DARK_BG",
    "DARK_BG_CARD",
    "DARK_SURFACE",
    "TEXT_PRIMARY",
    "TEXT_SECONDARY",
    "PRIMARY",
    "DANGER",
    "SUMMARY_BG",
    "init_dark_theme",
    "get_text_config",
]
