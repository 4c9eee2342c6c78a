# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Filesystem helpers: atomic writes and output directories."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from iconforge.utils.error_handler import IconIOError

logger = logging.getLogger("iconforge.files")


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise IconIOError(f"Cannot read file: {e.strerror or e}", path=path) from e


def ensure_dir(path: Path) -> None:
    """Create ``path`` as a directory, failing if a file is in the way."""
    if path.exists() and not path.is_dir():
        raise IconIOError("Output path exists and is not a directory", path=path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IconIOError(f"Cannot create directory: {e.strerror or e}", path=path) from e


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via write-then-rename so readers never see a partial file."""
    if path.parent != Path(""):
        ensure_dir(path.parent)
    tmp: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as f:
            tmp = Path(f.name)
            f.write(data)
        tmp.replace(path)
    except OSError as e:
        raise IconIOError(f"Cannot write file: {e.strerror or e}", path=path) from e
    finally:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
    logger.info(f"Wrote {path} ({len(data) / 1024:.1f} KB)")


def unique_path(path: Path) -> Path:
    """Return ``path`` or, if taken, the first free ``stem-N.suffix`` variant."""
    candidate = path
    counter = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}-{counter}{path.suffix}")
        counter += 1
    return candidate
