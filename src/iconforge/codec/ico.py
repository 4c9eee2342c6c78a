# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Windows .ico container codec (PNG-compressed entries)."""

from __future__ import annotations

import logging
import struct
from typing import Sequence

from iconforge.core.constants import ICO_ENTRY_SIZE, ICO_HEADER_SIZE, ICO_MAX_EDGE
from iconforge.core.models import IconFrame
from iconforge.utils.error_handler import CorruptContainerError, UnsupportedFormatError
from iconforge.utils.image_io import is_png

logger = logging.getLogger("iconforge.codec")

_HEADER = struct.Struct("<HHH")
_ENTRY = struct.Struct("<BBBBHHII")
_TYPE_ICON = 1
_TYPE_CURSOR = 2


def _dimension_byte(value: int) -> int:
    # One byte per dimension; 0 stands for 256
    return 0 if value == ICO_MAX_EDGE else value


def decode(data: bytes) -> list[IconFrame]:
    """Parse an .ico file into frames in directory order."""
    if len(data) < ICO_HEADER_SIZE:
        raise CorruptContainerError(
            f"ICO header truncated: need {ICO_HEADER_SIZE} bytes, found {len(data)}", offset=0
        )

    reserved, kind, count = _HEADER.unpack_from(data, 0)
    if reserved != 0:
        raise CorruptContainerError(f"ICO reserved field must be 0, found {reserved}", offset=0)
    if kind == _TYPE_CURSOR:
        raise UnsupportedFormatError("Cursor (.cur) files are not supported")
    if kind != _TYPE_ICON:
        raise UnsupportedFormatError(f"Unknown ICO resource type {kind}")

    directory_end = ICO_HEADER_SIZE + ICO_ENTRY_SIZE * count
    if directory_end > len(data):
        raise CorruptContainerError(
            f"ICO directory truncated: {count} entries need {directory_end} bytes, found {len(data)}",
            offset=ICO_HEADER_SIZE,
        )

    frames: list[IconFrame] = []
    for index in range(count):
        entry_offset = ICO_HEADER_SIZE + ICO_ENTRY_SIZE * index
        width, height, _colors, _reserved, _planes, _bits, size, offset = _ENTRY.unpack_from(data, entry_offset)
        end = offset + size
        if end > len(data):
            raise CorruptContainerError(
                f"ICO entry {index} image data out of range: expected {size} bytes at {offset}, "
                f"file is {len(data)} bytes",
                offset=entry_offset,
            )
        blob = data[offset:end]
        if not is_png(blob):
            logger.warning("ICO entry %d is not PNG-compressed; keeping raw payload", index)
        frames.append(IconFrame(
            width=width or ICO_MAX_EDGE,
            height=height or ICO_MAX_EDGE,
            scale=1,
            pixels=blob,
        ))

    logger.debug("Decoded ICO with %d frames", len(frames))
    return frames


def encode(frames: Sequence[IconFrame]) -> bytes:
    """Pack frames into an .ico file, preserving their order."""
    count = len(frames)
    if count > 0xFFFF:
        raise UnsupportedFormatError(f"ICO holds at most 65535 images, got {count}")

    for frame in frames:
        if not frame.is_square:
            raise UnsupportedFormatError(f"ICO frames must be square, got {frame.width}x{frame.height}")
        if not 1 <= frame.edge <= ICO_MAX_EDGE:
            raise UnsupportedFormatError(
                f"ICO frame edge must be between 1 and {ICO_MAX_EDGE}, got {frame.edge}"
            )

    parts = [_HEADER.pack(0, _TYPE_ICON, count)]
    offset = ICO_HEADER_SIZE + ICO_ENTRY_SIZE * count
    for frame in frames:
        size = len(frame.pixels)
        parts.append(_ENTRY.pack(
            _dimension_byte(frame.width),
            _dimension_byte(frame.height),
            0,  # color count
            0,  # reserved
            1,  # planes
            32,  # bit count
            size,
            offset,
        ))
        offset += size
    parts.extend(frame.pixels for frame in frames)

    logger.debug("Encoded ICO with %d frames (%d bytes)", count, offset)
    return b"".join(parts)
