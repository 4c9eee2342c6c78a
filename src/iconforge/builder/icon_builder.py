# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Build .ico/.icns containers from a single source image or a directory."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from PIL import Image

from iconforge.codec import icns
from iconforge.codec.registry import get_codec
from iconforge.codec.scaling import scale
from iconforge.core.constants import CANDIDATE_SUFFIXES, ICO_MAX_EDGE
from iconforge.core.models import BuildOptions, ContainerFormat, IconFrame, ScalingMode
from iconforge.utils.error_handler import EmptyInputError, IconIOError, UnsupportedFormatError
from iconforge.utils.file_utils import write_bytes_atomic
from iconforge.utils.image_io import encode_png, load_image, probe_size

logger = logging.getLogger("iconforge.builder")


def plan_frames(fmt: ContainerFormat, sizes: tuple[int, ...]) -> list[tuple[int, int]]:
    """Return the (edge, scale) pairs to render, in container order.

    Unsupported edges fail here, before any pixel work.
    """
    plan: list[tuple[int, int]] = []
    for edge in sizes:
        if fmt is ContainerFormat.ICO:
            if edge > ICO_MAX_EDGE:
                raise UnsupportedFormatError(f"ICO cannot hold {edge}x{edge} (max {ICO_MAX_EDGE})")
            plan.append((edge, 1))
        else:
            icns.tag_for(edge, 1)
            plan.append((edge, 1))
            if icns.has_retina(edge):
                plan.append((edge, 2))
    return plan


def _render(image: Image.Image, edge: int, options: BuildOptions) -> bytes:
    return encode_png(scale(image, edge, options.mode, options.resample), options.compress_level)


def build_frames(
    image: Image.Image,
    fmt: ContainerFormat,
    options: BuildOptions | None = None,
) -> list[IconFrame]:
    """Scale ``image`` to every planned size and wrap each PNG in a frame."""
    options = options or BuildOptions()
    plan = plan_frames(fmt, options.sizes_for(fmt))

    # Retina variants share pixels with the same-edge base frame, so each
    # distinct edge is rendered once
    edges = list(dict.fromkeys(edge for edge, _scale in plan))
    if options.workers > 1 and len(edges) > 1:
        with ThreadPoolExecutor(max_workers=min(options.workers, len(edges))) as pool:
            rendered = list(pool.map(lambda e: _render(image, e, options), edges))
    else:
        rendered = [_render(image, e, options) for e in edges]
    pngs = dict(zip(edges, rendered))

    frames = [IconFrame(width=edge, height=edge, scale=s, pixels=pngs[edge]) for edge, s in plan]
    logger.info(
        "Rendered %d %s frames from %dx%d source (%s)",
        len(frames), fmt.value.upper(), image.width, image.height, options.mode.value,
    )
    return frames


def build_icon(
    image: Image.Image,
    fmt: ContainerFormat,
    options: BuildOptions | None = None,
) -> bytes:
    """Render frames for ``fmt`` and encode them into container bytes."""
    frames = build_frames(image, fmt, options)
    return get_codec(fmt).encode(frames)


def build_icon_file(
    source: Path,
    fmt: ContainerFormat,
    output: Path,
    options: BuildOptions | None = None,
) -> Path:
    """Build a container from one source image file and write it to ``output``."""
    image = load_image(source)
    data = build_icon(image, fmt, options)
    write_bytes_atomic(output, data)
    return output


def find_candidate_images(directory: Path) -> list[Path]:
    """List PNG/JPEG files directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        raise IconIOError("Source directory not found", path=directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise IconIOError(f"Cannot list directory: {e.strerror or e}", path=directory) from e
    return sorted(
        p for p in entries
        if p.is_file() and p.suffix.lower() in CANDIDATE_SUFFIXES
    )


def select_base_image(paths: list[Path]) -> Path:
    """Pick the image with the largest pixel area; ties keep the earliest path."""
    if not paths:
        raise EmptyInputError("No candidate images to choose from")
    best = paths[0]
    best_area = -1
    for path in paths:
        w, h = probe_size(path)
        logger.debug("Candidate %s: %dx%d", path.name, w, h)
        if w * h > best_area:
            best, best_area = path, w * h
    return best


def build_icon_from_dir(
    directory: Path,
    fmt: ContainerFormat,
    output: Path,
    options: BuildOptions | None = None,
) -> Path:
    """Build a container from the largest image in ``directory``.

    Every target size is scaled from that one base image under CONTAIN;
    smaller files in the directory are not used as per-size sources.
    """
    candidates = find_candidate_images(directory)
    if not candidates:
        raise EmptyInputError("No .png/.jpg/.jpeg images found", path=directory)
    base = select_base_image(candidates)
    logger.info("Using %s as base image (%d candidates)", base.name, len(candidates))

    options = options or BuildOptions()
    contain_options = BuildOptions(
        sizes=options.sizes,
        mode=ScalingMode.CONTAIN,
        resample=options.resample,
        workers=options.workers,
        compress_level=options.compress_level,
    )
    return build_icon_file(base, fmt, output, contain_options)
