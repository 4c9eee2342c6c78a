# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Application constants, directories, and static size tables."""

import os
import sys
from pathlib import Path

APP_NAME = "IconForge"
APP_VERSION = "1.0.0"


def _user_data_dir() -> Path:
    """Return the platform-appropriate user data directory for IconForge."""
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / APP_NAME.lower()


def _detect_app_dir() -> Path:
    """Resolve the application root directory.

    1. Dev (git clone): project root where pyproject.toml + src/ exist
    2. Pip-installed (fallback): user data dir
    """
    # 4 parents up from this file is the checkout root in a src/ layout
    candidate = Path(__file__).resolve().parent.parent.parent.parent
    if (candidate / "pyproject.toml").exists() and (candidate / "src").is_dir():
        return candidate
    return _user_data_dir()


APP_DIR = _detect_app_dir()
CONFIG_DIR = APP_DIR / "config"
DATA_DIR = APP_DIR / "data"
CONFIG_PATH = CONFIG_DIR / "iconforge.json"
LOG_FILE_NAME = "iconforge.log"

# ICO
ICO_HEADER_SIZE = 6
ICO_ENTRY_SIZE = 16
ICO_MAX_EDGE = 256
ICO_DEFAULT_SIZES = (16, 24, 32, 48, 64, 128, 256)

# ICNS
ICNS_MAGIC = b"icns"
ICNS_HEADER_SIZE = 8
ICNS_DEFAULT_SIZES = (16, 32, 64, 128, 256, 512, 1024)

# PNG signature, used to tell PNG payloads from legacy DIB entries
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Extraction output naming
FRAME_FILENAME_TEMPLATE = "{width}x{height}-{index}.png"

# Directory builder input
CANDIDATE_SUFFIXES = (".png", ".jpg", ".jpeg")

# Defaults
DEFAULT_SCALING_MODE = "contain"
DEFAULT_RESAMPLE = "lanczos"
DEFAULT_WORKERS = 1
MAX_WORKERS = 32
DEFAULT_COMPRESS_LEVEL = 6
