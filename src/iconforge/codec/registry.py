# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Dispatch from a container format to its decode/encode pair."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Sequence

from iconforge.codec import icns, ico
from iconforge.core.models import ContainerFormat, IconFrame


@dataclass(frozen=True)
class IconCodec:
    """A container codec: bytes <-> frames."""
    format: ContainerFormat
    decode: Callable[[bytes], list[IconFrame]]
    encode: Callable[[Sequence[IconFrame]], bytes]


CODECS = MappingProxyType({
    ContainerFormat.ICO: IconCodec(ContainerFormat.ICO, ico.decode, ico.encode),
    ContainerFormat.ICNS: IconCodec(ContainerFormat.ICNS, icns.decode, icns.encode),
})


def get_codec(fmt: ContainerFormat) -> IconCodec:
    return CODECS[fmt]
