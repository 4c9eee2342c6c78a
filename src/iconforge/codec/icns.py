# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""macOS .icns container codec (PNG-bearing chunk types only).

An .icns file is an 8-byte header (``icns`` + total length) followed by
chunks of ``tag:4 | length:4 | payload``, all big-endian. The chunk length
counts its own 8-byte prefix. Each PNG chunk type maps to exactly one
(pixel edge, scale) pair; anything else (``TOC ``, ``icnV``, ``info``, the
legacy RLE/ARGB types) is skipped when reading.
"""

from __future__ import annotations

import logging
import struct
from types import MappingProxyType
from typing import Sequence

from iconforge.core.constants import ICNS_HEADER_SIZE, ICNS_MAGIC
from iconforge.core.models import IconFrame
from iconforge.utils.error_handler import (
    CorruptContainerError,
    UnsupportedFormatError,
    UnsupportedSizeError,
)

logger = logging.getLogger("iconforge.codec")

_PREFIX = struct.Struct(">4sI")

# tag -> (pixel edge, scale)
ICNS_TYPES = MappingProxyType({
    b"icp4": (16, 1),
    b"icp5": (32, 1),
    b"icp6": (64, 1),
    b"ic07": (128, 1),
    b"ic08": (256, 1),
    b"ic09": (512, 1),
    b"ic10": (1024, 1),
    b"ic11": (32, 2),
    b"ic12": (64, 2),
    b"ic13": (256, 2),
    b"ic14": (512, 2),
})

_TAGS_BY_SIZE = MappingProxyType({size: tag for tag, size in ICNS_TYPES.items()})

SUPPORTED_EDGES = tuple(sorted({edge for edge, scale in ICNS_TYPES.values() if scale == 1}))


def tag_for(edge: int, scale: int = 1) -> bytes:
    """Forward lookup: chunk tag for a pixel edge and scale."""
    try:
        return _TAGS_BY_SIZE[(edge, scale)]
    except KeyError:
        raise UnsupportedSizeError(
            f"No ICNS chunk type for {edge}x{edge}@{scale}x "
            f"(supported edges: {', '.join(map(str, SUPPORTED_EDGES))})"
        ) from None


def size_for(tag: bytes) -> tuple[int, int] | None:
    """Reverse lookup: (edge, scale) for a chunk tag, None if unknown."""
    return ICNS_TYPES.get(tag)


def has_retina(edge: int) -> bool:
    return (edge, 2) in _TAGS_BY_SIZE


def decode(data: bytes) -> list[IconFrame]:
    """Parse an .icns file into frames in chunk order."""
    if len(data) < ICNS_HEADER_SIZE:
        raise CorruptContainerError(
            f"ICNS header truncated: need {ICNS_HEADER_SIZE} bytes, found {len(data)}", offset=0
        )
    magic, file_length = _PREFIX.unpack_from(data, 0)
    if magic != ICNS_MAGIC:
        raise CorruptContainerError(f"Bad ICNS magic: expected {ICNS_MAGIC!r}, found {magic!r}", offset=0)
    if file_length != len(data):
        raise CorruptContainerError(
            f"ICNS declared length {file_length} does not match file size {len(data)}", offset=4
        )

    frames: list[IconFrame] = []
    consumed = ICNS_HEADER_SIZE
    while consumed < file_length:
        remaining = file_length - consumed
        if remaining < _PREFIX.size:
            raise CorruptContainerError(
                f"ICNS chunk header truncated: need {_PREFIX.size} bytes, found {remaining}", offset=consumed
            )
        tag, chunk_length = _PREFIX.unpack_from(data, consumed)
        if chunk_length < _PREFIX.size:
            raise CorruptContainerError(
                f"ICNS chunk {tag!r} has invalid length {chunk_length}", offset=consumed
            )
        if chunk_length > remaining:
            raise CorruptContainerError(
                f"ICNS chunk {tag!r} declares {chunk_length} bytes but only {remaining} remain",
                offset=consumed,
            )

        size = size_for(tag)
        if size is None:
            logger.debug("Skipping ICNS chunk %r (%d bytes)", tag, chunk_length)
        else:
            edge, scale = size
            frames.append(IconFrame(
                width=edge,
                height=edge,
                scale=scale,
                pixels=data[consumed + _PREFIX.size:consumed + chunk_length],
            ))
        consumed += chunk_length

    if consumed != file_length:
        raise CorruptContainerError(
            f"ICNS chunks total {consumed} bytes, header declares {file_length}", offset=consumed
        )

    logger.debug("Decoded ICNS with %d frames", len(frames))
    return frames


def encode(frames: Sequence[IconFrame]) -> bytes:
    """Pack frames into an .icns file, chunks sorted by ascending (edge, scale)."""
    tagged: list[tuple[tuple[int, int], bytes, IconFrame]] = []
    seen: set[bytes] = set()
    for frame in frames:
        if not frame.is_square:
            raise UnsupportedFormatError(f"ICNS frames must be square, got {frame.width}x{frame.height}")
        tag = tag_for(frame.edge, frame.scale)
        if tag in seen:
            raise UnsupportedFormatError(
                f"Duplicate ICNS frame for {frame.edge}x{frame.edge}@{frame.scale}x ({tag.decode()})"
            )
        seen.add(tag)
        tagged.append(((frame.edge, frame.scale), tag, frame))
    tagged.sort(key=lambda item: item[0])

    buf = bytearray(_PREFIX.pack(ICNS_MAGIC, 0))
    for _size, tag, frame in tagged:
        buf += _PREFIX.pack(tag, _PREFIX.size + len(frame.pixels))
        buf += frame.pixels
    # Backpatch total length now that every chunk is in place
    struct.pack_into(">I", buf, 4, len(buf))

    logger.debug("Encoded ICNS with %d chunks (%d bytes)", len(tagged), len(buf))
    return bytes(buf)
