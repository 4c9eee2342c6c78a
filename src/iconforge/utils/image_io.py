# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Pillow bridge: load source images, encode PNG frames, read image sizes."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from iconforge.core.constants import DEFAULT_COMPRESS_LEVEL, PNG_SIGNATURE
from iconforge.utils.error_handler import IconIOError, UnsupportedFormatError

logger = logging.getLogger("iconforge.image_io")


def load_image(path: Path) -> Image.Image:
    """Decode an image file into an RGBA Pillow image."""
    try:
        with Image.open(path) as img:
            img.load()
            rgba = img.convert("RGBA") if img.mode != "RGBA" else img.copy()
    except UnidentifiedImageError:
        raise UnsupportedFormatError("Not a recognized image file", path=path) from None
    except Image.DecompressionBombError as e:
        raise UnsupportedFormatError(f"Image too large: {e}", path=path) from None
    except OSError as e:
        raise IconIOError(f"Cannot read image: {e.strerror or e}", path=path) from e
    logger.debug("Loaded %s (%dx%d)", path, rgba.width, rgba.height)
    return rgba


def probe_size(path: Path) -> tuple[int, int]:
    """Return (width, height) from the image header without decoding pixels."""
    try:
        with Image.open(path) as img:
            return img.size
    except UnidentifiedImageError:
        raise UnsupportedFormatError("Not a recognized image file", path=path) from None
    except Image.DecompressionBombError as e:
        raise UnsupportedFormatError(f"Image too large: {e}", path=path) from None
    except OSError as e:
        raise IconIOError(f"Cannot read image: {e.strerror or e}", path=path) from e


def encode_png(image: Image.Image, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG", compress_level=compress_level)
    return buf.getvalue()


def is_png(data: bytes) -> bool:
    return data[:8] == PNG_SIGNATURE

