"""
screening.utils.env - SCREENING_* / GEMINI_* environment lookups

The repository's .env is read once through python-dotenv. Every getter
returns its default for an unset or unparsable variable, so a typo in
.env degrades to the built-in session settings instead of a crash.
"""

import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from .paths import get_env_path

T = TypeVar("T")

TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})

_env_loaded = False


def load_env(env_path: Optional[Path] = None, override: bool = False) -> bool:
    """
    Read the .env file into os.environ.

    Only the first successful call does any work unless override is set,
    in which case the file is re-read and wins over the process env.

    Returns:
        False when the file does not exist
    """
    global _env_loaded

    if _env_loaded and not override:
        return True

    path = Path(env_path) if env_path is not None else get_env_path()
    if not path.is_file():
        return False

    load_dotenv(path, override=override, encoding="utf-8")
    _env_loaded = True
    return True


def _lookup(name: str, default: T, convert: Callable[[str], T]) -> T:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        return default


def get_env_str(name: str, default: str = "") -> str:
    return _lookup(name, default, str)


def get_env_int(name: str, default: int = 0) -> int:
    return _lookup(name, default, int)


def get_env_float(name: str, default: float = 0.0) -> float:
    return _lookup(name, default, float)


def get_env_bool(name: str, default: bool = False) -> bool:
    """Accepts 1/0, true/false, yes/no, on/off; anything else is default."""

    def to_bool(text: str) -> bool:
        word = text.lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ValueError(text)

    return _lookup(name, default, to_bool)


def get_gemini_api_key(fallback: Optional[str] = None) -> Optional[str]:
    """GEMINI_API_KEY from the environment or .env, else fallback (or None)."""
    load_env()
    return get_env_str("GEMINI_API_KEY") or fallback or None
