# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Custom exceptions and logging setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from iconforge.core.constants import DATA_DIR, LOG_FILE_NAME


class IconForgeError(Exception):
    """Base exception for IconForge.

    ``path`` and ``offset`` are optional context rendered into ``str()`` so
    the CLI can print a single self-explanatory line.
    """

    def __init__(self, message: str, *, path: Path | str | None = None, offset: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.offset = offset

    def __str__(self) -> str:
        parts = [self.message]
        if self.offset is not None:
            parts.append(f"(at offset {self.offset})")
        if self.path is not None:
            parts.append(f"[{self.path}]")
        return " ".join(parts)


class IconIOError(IconForgeError):
    """File missing, unreadable, or unwritable."""


class CorruptContainerError(IconForgeError):
    """Container bytes are inconsistent: bad magic, lengths, or offsets."""


class UnsupportedFormatError(IconForgeError):
    """Unrecognized container type or a frame the format cannot hold."""


class UnsupportedSizeError(UnsupportedFormatError):
    """Edge/scale pair outside the ICNS tag table."""


class EmptyInputError(IconForgeError):
    """Nothing to build from or nothing to extract."""


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure application logging."""
    logger = logging.getLogger("iconforge")
    # Guard against duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Console handler on the diagnostic stream; stdout stays free for output
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(console)

    # File handler with rotation (5 MB max, 3 backups)
    from logging.handlers import RotatingFileHandler
    log_dir = DATA_DIR
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=5 * 1024 * 1024,
            backupCount=3, encoding="utf-8",
        )
    except OSError as e:
        logger.warning("File logging disabled, cannot write to %s: %s", log_dir, e)
        return logger
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    ))
    logger.addHandler(file_handler)

    return logger
