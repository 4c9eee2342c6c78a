# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""JSON configuration loading and saving."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from iconforge.core.constants import (
    CONFIG_PATH,
    DEFAULT_COMPRESS_LEVEL,
    DEFAULT_RESAMPLE,
    DEFAULT_SCALING_MODE,
    DEFAULT_WORKERS,
    MAX_WORKERS,
)
from iconforge.core.models import ContainerFormat, ScalingMode, normalize_sizes
from iconforge.utils.error_handler import UnsupportedFormatError
from iconforge.utils.file_utils import write_bytes_atomic

logger = logging.getLogger("iconforge.config")

RESAMPLE_NAMES = ("nearest", "bilinear", "bicubic", "lanczos")


def _safe_int(value: Any, default: int) -> int:
    """Convert value to int, returning default on failure."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _load_json(path: Path) -> dict[str, Any]:
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Corrupt config file {path}: {e} - using defaults")
    return {}


def _save_json(path: Path, data: dict) -> None:
    write_bytes_atomic(path, json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8"))


class IconForgeConfig:
    """User defaults for building icons."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or CONFIG_PATH
        self._data: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        self._data = _load_json(self.path)

    def save(self) -> None:
        _save_json(self.path, self._data)

    @property
    def scaling_mode(self) -> ScalingMode:
        try:
            return ScalingMode(str(self._data.get("scaling_mode", DEFAULT_SCALING_MODE)).lower())
        except ValueError:
            logger.warning("Unknown scaling_mode %r, using %s", self._data.get("scaling_mode"), DEFAULT_SCALING_MODE)
            return ScalingMode(DEFAULT_SCALING_MODE)

    @scaling_mode.setter
    def scaling_mode(self, value: ScalingMode) -> None:
        self._data["scaling_mode"] = value.value

    @property
    def resample(self) -> str:
        name = str(self._data.get("resample", DEFAULT_RESAMPLE)).lower()
        if name not in RESAMPLE_NAMES:
            logger.warning("Unknown resample filter %r, using %s", name, DEFAULT_RESAMPLE)
            return DEFAULT_RESAMPLE
        return name

    @resample.setter
    def resample(self, value: str) -> None:
        if value not in RESAMPLE_NAMES:
            raise ValueError(f"resample must be one of {', '.join(RESAMPLE_NAMES)}")
        self._data["resample"] = value

    @property
    def workers(self) -> int:
        val = _safe_int(self._data.get("workers", DEFAULT_WORKERS), DEFAULT_WORKERS)
        return max(1, min(MAX_WORKERS, val))

    @workers.setter
    def workers(self, value: int) -> None:
        self._data["workers"] = max(1, min(MAX_WORKERS, value))

    @property
    def compress_level(self) -> int:
        val = _safe_int(self._data.get("compress_level", DEFAULT_COMPRESS_LEVEL), DEFAULT_COMPRESS_LEVEL)
        return max(0, min(9, val))

    @compress_level.setter
    def compress_level(self, value: int) -> None:
        self._data["compress_level"] = max(0, min(9, value))

    def sizes_for(self, fmt: ContainerFormat) -> tuple[int, ...] | None:
        """Configured size override for a format, or None to use its defaults."""
        raw = self._data.get(f"{fmt.value}_sizes")
        if raw is None:
            return None
        if not isinstance(raw, list) or not raw:
            logger.warning("Ignoring malformed %s_sizes: %r", fmt.value, raw)
            return None
        try:
            return normalize_sizes(raw)
        except UnsupportedFormatError as e:
            logger.warning("Ignoring %s_sizes: %s", fmt.value, e)
            return None

    def set_sizes(self, fmt: ContainerFormat, sizes: list[int] | None) -> None:
        if sizes is None:
            self._data.pop(f"{fmt.value}_sizes", None)
        else:
            self._data[f"{fmt.value}_sizes"] = list(normalize_sizes(sizes))
