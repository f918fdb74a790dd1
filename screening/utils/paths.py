"""
screening.utils.paths - Centralized path management

All default locations (exports, logs, GUI preferences, .env) are derived
from the repository root once at import time.
"""

from pathlib import Path
from typing import Union

# Calculate paths once at import time
_THIS_FILE = Path(__file__).resolve()
UTILS_DIR = _THIS_FILE.parent
PACKAGE_DIR = UTILS_DIR.parent
ROOT_DIR = PACKAGE_DIR.parent
DATA_DIR = ROOT_DIR / "data"

# Common subdirectories
EXPORT_DIR = DATA_DIR / "exports"
LOGS_DIR = ROOT_DIR / "logs"
CONFIG_PATH = DATA_DIR / "config.json"


def get_env_path() -> Path:
    """Get path to .env file."""
    return ROOT_DIR / ".env"


def ensure_dir(path: Union[str, Path]) -> Path:
    """
    Create a directory (and parents) if needed.

    Returns:
        The directory as a Path
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
