# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Split .ico/.icns containers into one PNG file per frame."""

from __future__ import annotations

import logging
from pathlib import Path

from iconforge.codec.registry import get_codec
from iconforge.core.constants import FRAME_FILENAME_TEMPLATE
from iconforge.core.models import ContainerFormat, IconFrame
from iconforge.utils.error_handler import (
    EmptyInputError,
    IconForgeError,
    IconIOError,
    UnsupportedFormatError,
)
from iconforge.utils.file_utils import ensure_dir, read_bytes, unique_path

logger = logging.getLogger("iconforge.builder")


def detect_format(data: bytes, path: Path | None = None) -> ContainerFormat:
    """Identify the container by magic bytes, falling back to the file suffix."""
    fmt = ContainerFormat.sniff(data)
    if fmt is not None:
        return fmt
    if path is not None:
        return ContainerFormat.from_path(path)
    raise UnsupportedFormatError("Unrecognized icon container")


def frame_filename(frame: IconFrame, index: int) -> str:
    return FRAME_FILENAME_TEMPLATE.format(width=frame.width, height=frame.height, index=index)


def extract_frames(data: bytes, fmt: ContainerFormat | None = None) -> list[IconFrame]:
    """Decode container bytes into frames, in container order."""
    fmt = fmt or detect_format(data)
    return get_codec(fmt).decode(data)


def extract_icon_file(path: Path, out_dir: Path) -> list[Path]:
    """Write every frame of the container at ``path`` into ``out_dir``.

    The whole container is decoded before anything is written. Frame bytes
    are copied unchanged; existing files are never overwritten.
    """
    data = read_bytes(path)
    fmt = detect_format(data, path)
    try:
        frames = extract_frames(data, fmt)
    except IconForgeError as e:
        if e.path is None:
            e.path = path
        raise
    if not frames:
        raise EmptyInputError(f"No icon frames found in {fmt.value.upper()} container", path=path)

    ensure_dir(out_dir)
    written: list[Path] = []
    for index, frame in enumerate(frames):
        target = unique_path(out_dir / frame_filename(frame, index))
        try:
            target.write_bytes(frame.pixels)
        except OSError as e:
            # Roll back so a failed extraction leaves no frames behind
            for done in [*written, target]:
                done.unlink(missing_ok=True)
            raise IconIOError(f"Cannot write frame {index}: {e.strerror or e}", path=target) from e
        written.append(target)

    logger.info("Extracted %d frames from %s into %s", len(written), path.name, out_dir)
    return written
