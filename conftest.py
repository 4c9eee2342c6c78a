"""Shared pytest fixtures for IconForge tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from iconforge.core.models import IconFrame


def make_png(width: int, height: int | None = None, color: tuple[int, int, int, int] = (200, 40, 40, 255)) -> bytes:
    """Encode a solid-colour RGBA PNG in memory."""
    img = Image.new("RGBA", (width, height or width), color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Factory for in-memory PNG blobs."""
    return make_png


@pytest.fixture
def opaque_image() -> Image.Image:
    """A fully opaque 200x100 landscape image."""
    return Image.new("RGBA", (200, 100), (10, 120, 250, 255))


@pytest.fixture
def portrait_image() -> Image.Image:
    """A fully opaque 60x180 portrait image."""
    return Image.new("RGBA", (60, 180), (30, 200, 90, 255))


@pytest.fixture
def write_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory that saves a solid image to tmp_path and returns its path."""

    def _write(name: str, width: int, height: int | None = None, fmt: str | None = None) -> Path:
        path = tmp_path / name
        mode = "RGB" if path.suffix.lower() in (".jpg", ".jpeg") else "RGBA"
        color = (90, 90, 200) if mode == "RGB" else (90, 90, 200, 255)
        Image.new(mode, (width, height or width), color).save(path, format=fmt)
        return path

    return _write


@pytest.fixture
def ico_frames() -> list[IconFrame]:
    """One frame per default ICO size, each with distinct pixel content."""
    return [
        IconFrame(width=s, height=s, scale=1, pixels=make_png(s, color=(s % 256, 0, 0, 255)))
        for s in (16, 24, 32, 48, 64, 128, 256)
    ]


@pytest.fixture
def icns_frames() -> list[IconFrame]:
    """Base and retina frames for every ICNS table entry."""
    pairs = [(16, 1), (32, 1), (64, 1), (128, 1), (256, 1), (512, 1), (1024, 1),
             (32, 2), (64, 2), (256, 2), (512, 2)]
    # Tiny stand-in payloads keep the 1024 frame cheap; the codec treats them as opaque
    return [
        IconFrame(width=e, height=e, scale=s, pixels=make_png(4, color=(e % 256, s, 0, 255)))
        for e, s in pairs
    ]
