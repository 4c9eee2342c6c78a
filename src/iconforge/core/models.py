# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Data models for IconForge."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from iconforge.core.constants import (
    DEFAULT_COMPRESS_LEVEL,
    DEFAULT_RESAMPLE,
    DEFAULT_WORKERS,
    ICNS_DEFAULT_SIZES,
    ICNS_MAGIC,
    ICO_DEFAULT_SIZES,
)
from iconforge.utils.error_handler import UnsupportedFormatError

if TYPE_CHECKING:
    from iconforge.core.config import IconForgeConfig

_ICO_MAGIC = b"\x00\x00\x01\x00"


class ScalingMode(Enum):
    """How a source image is fitted into a square target."""
    CONTAIN = "contain"
    COVER = "cover"

    @classmethod
    def from_flag(cls, contain: bool) -> ScalingMode:
        return cls.CONTAIN if contain else cls.COVER


class ContainerFormat(Enum):
    """Icon container formats."""
    ICO = "ico"
    ICNS = "icns"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def default_sizes(self) -> tuple[int, ...]:
        return ICO_DEFAULT_SIZES if self is ContainerFormat.ICO else ICNS_DEFAULT_SIZES

    @classmethod
    def from_name(cls, name: str) -> ContainerFormat:
        try:
            return cls(name.strip().lower().lstrip("."))
        except ValueError:
            raise UnsupportedFormatError(f"Unknown container format: {name!r}") from None

    @classmethod
    def from_path(cls, path: Path | str) -> ContainerFormat:
        """Pick the format from a file suffix."""
        suffix = Path(path).suffix
        if not suffix:
            raise UnsupportedFormatError("Cannot infer container format without a file extension", path=path)
        try:
            return cls.from_name(suffix)
        except UnsupportedFormatError:
            raise UnsupportedFormatError(f"Unsupported container extension: {suffix}", path=path) from None

    @classmethod
    def sniff(cls, data: bytes) -> ContainerFormat | None:
        """Identify a container from its magic bytes, or None."""
        if data[:4] == ICNS_MAGIC:
            return cls.ICNS
        if data[:4] == _ICO_MAGIC:
            return cls.ICO
        return None


@dataclass
class IconFrame:
    """One image inside a container.

    ``width``/``height`` are the pixel dimensions of the embedded PNG;
    ``scale`` is 2 for retina variants.
    """
    width: int
    height: int
    scale: int = 1
    pixels: bytes = b""

    @property
    def edge(self) -> int:
        return self.width

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @property
    def logical_size(self) -> int:
        return self.width // self.scale

    def __repr__(self) -> str:
        return f"IconFrame({self.width}x{self.height}@{self.scale}x, {len(self.pixels)} bytes)"


def normalize_sizes(sizes: Iterable[int]) -> tuple[int, ...]:
    """Validate target edges and drop duplicates, keeping first occurrence."""
    result: list[int] = []
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise UnsupportedFormatError(f"Invalid icon size: {size!r} (expected a positive integer)")
        if size not in result:
            result.append(size)
    return tuple(result)


@dataclass
class BuildOptions:
    """Everything the builder needs besides the image and the format."""
    sizes: tuple[int, ...] | None = None
    mode: ScalingMode = ScalingMode.CONTAIN
    resample: str = DEFAULT_RESAMPLE
    workers: int = DEFAULT_WORKERS
    compress_level: int = DEFAULT_COMPRESS_LEVEL

    def sizes_for(self, fmt: ContainerFormat) -> tuple[int, ...]:
        """Effective SizeSpec: explicit override or the format default."""
        if self.sizes is None:
            return fmt.default_sizes
        return normalize_sizes(self.sizes)

    @classmethod
    def from_config(cls, config: IconForgeConfig, fmt: ContainerFormat | None = None) -> BuildOptions:
        sizes = config.sizes_for(fmt) if fmt is not None else None
        return cls(
            sizes=sizes,
            mode=config.scaling_mode,
            resample=config.resample,
            workers=config.workers,
            compress_level=config.compress_level,
        )
