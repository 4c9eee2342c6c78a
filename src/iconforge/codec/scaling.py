# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Resize a source image into an exact square (contain or cover)."""

from __future__ import annotations

import logging

from PIL import Image

from iconforge.core.constants import DEFAULT_RESAMPLE
from iconforge.core.models import ScalingMode
from iconforge.utils.error_handler import UnsupportedFormatError

logger = logging.getLogger("iconforge.codec")

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def _resample_filter(name: str) -> Image.Resampling:
    try:
        return RESAMPLE_FILTERS[name]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unknown resample filter {name!r} (expected one of {', '.join(RESAMPLE_FILTERS)})"
        ) from None


def scale(
    image: Image.Image,
    edge: int,
    mode: ScalingMode = ScalingMode.CONTAIN,
    resample: str = DEFAULT_RESAMPLE,
) -> Image.Image:
    """Return an ``edge`` x ``edge`` RGBA rendition of ``image``.

    CONTAIN fits the whole source and pads with transparent pixels.
    COVER fills the square and crops the overflow symmetrically, with the
    odd pixel trimmed from the trailing side.
    """
    if edge < 1:
        raise UnsupportedFormatError(f"Target edge must be positive, got {edge}")
    if image.width < 1 or image.height < 1:
        raise UnsupportedFormatError(f"Source image is empty ({image.width}x{image.height})")

    src = image if image.mode == "RGBA" else image.convert("RGBA")
    flt = _resample_filter(resample)
    w, h = src.size

    if mode is ScalingMode.CONTAIN:
        factor = edge / max(w, h)
        nw = max(1, round(w * factor))
        nh = max(1, round(h * factor))
        resized = src.resize((nw, nh), flt)
        canvas = Image.new("RGBA", (edge, edge), (0, 0, 0, 0))
        # No mask: source pixels (alpha included) replace the canvas
        canvas.paste(resized, ((edge - nw) // 2, (edge - nh) // 2))
        result = canvas
    else:
        factor = edge / min(w, h)
        nw = max(edge, round(w * factor))
        nh = max(edge, round(h * factor))
        resized = src.resize((nw, nh), flt)
        left = (nw - edge) // 2
        top = (nh - edge) // 2
        result = resized.crop((left, top, left + edge, top + edge))

    logger.debug("Scaled %dx%d -> %dx%d (%s, %s)", w, h, edge, edge, mode.value, resample)
    return result
