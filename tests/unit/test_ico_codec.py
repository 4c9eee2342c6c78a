# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for the ICO container codec."""

from __future__ import annotations

import struct

import pytest

from iconforge.codec import ico
from iconforge.core.models import IconFrame
from iconforge.utils.error_handler import CorruptContainerError, UnsupportedFormatError


def _as_set(frames):
    return {(f.width, f.height, f.scale, f.pixels) for f in frames}


class TestEncodeLayout:
    def test_empty_container(self):
        assert ico.encode([]) == struct.pack("<HHH", 0, 1, 0)

    def test_single_frame_layout(self, png_bytes):
        blob = png_bytes(32)
        data = ico.encode([IconFrame(32, 32, 1, blob)])
        assert data[:6] == struct.pack("<HHH", 0, 1, 1)
        width, height, colors, reserved, planes, bits, size, offset = struct.unpack_from("<BBBBHHII", data, 6)
        assert (width, height, colors, reserved, planes, bits) == (32, 32, 0, 0, 1, 32)
        assert size == len(blob)
        assert offset == 22
        assert data[22:] == blob

    def test_offsets_accumulate(self, ico_frames):
        data = ico.encode(ico_frames)
        expected = 6 + 16 * len(ico_frames)
        for i, frame in enumerate(ico_frames):
            _w, _h, _c, _r, _p, _b, size, offset = struct.unpack_from("<BBBBHHII", data, 6 + 16 * i)
            assert offset == expected
            assert data[offset:offset + size] == frame.pixels
            expected += size
        assert len(data) == expected

    def test_256_stored_as_zero(self, png_bytes):
        data = ico.encode([IconFrame(256, 256, 1, png_bytes(4))])
        assert data[6] == 0
        assert data[7] == 0

    def test_entry_order_is_preserved(self, ico_frames):
        reordered = list(reversed(ico_frames))
        assert ico.decode(ico.encode(reordered))[0].width == 256

    def test_encode_is_deterministic(self, ico_frames):
        assert ico.encode(ico_frames) == ico.encode(list(ico_frames))


class TestEncodeErrors:
    def test_edge_over_256(self, png_bytes):
        with pytest.raises(UnsupportedFormatError, match="300"):
            ico.encode([IconFrame(300, 300, 1, png_bytes(4))])

    def test_non_square(self, png_bytes):
        with pytest.raises(UnsupportedFormatError, match="square"):
            ico.encode([IconFrame(32, 16, 1, png_bytes(4))])

    def test_zero_edge(self):
        with pytest.raises(UnsupportedFormatError):
            ico.encode([IconFrame(0, 0, 1, b"")])


class TestRoundTrip:
    @pytest.mark.parametrize("count", range(0, 8))
    def test_decode_encode(self, ico_frames, count):
        frames = ico_frames[:count]
        assert _as_set(ico.decode(ico.encode(frames))) == _as_set(frames)

    def test_duplicate_sizes_survive(self, png_bytes):
        frames = [
            IconFrame(16, 16, 1, png_bytes(16, color=(1, 1, 1, 255))),
            IconFrame(32, 32, 1, png_bytes(32)),
            IconFrame(16, 16, 1, png_bytes(16, color=(2, 2, 2, 255))),
        ]
        decoded = ico.decode(ico.encode(frames))
        assert [(f.width, f.pixels) for f in decoded] == [(f.width, f.pixels) for f in frames]

    def test_scale_is_always_one(self, ico_frames):
        assert {f.scale for f in ico.decode(ico.encode(ico_frames))} == {1}


class TestDecodeErrors:
    def test_truncated_header(self):
        with pytest.raises(CorruptContainerError, match="truncated"):
            ico.decode(b"\x00\x00\x01")

    def test_nonzero_reserved(self):
        with pytest.raises(CorruptContainerError, match="reserved"):
            ico.decode(struct.pack("<HHH", 7, 1, 0))

    def test_cursor_type_unsupported(self):
        with pytest.raises(UnsupportedFormatError, match="Cursor"):
            ico.decode(struct.pack("<HHH", 0, 2, 0))

    def test_unknown_type_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            ico.decode(struct.pack("<HHH", 0, 9, 0))

    def test_truncated_directory(self):
        data = struct.pack("<HHH", 0, 1, 3) + b"\x00" * 16
        with pytest.raises(CorruptContainerError, match="directory") as exc:
            ico.decode(data)
        assert exc.value.offset == 6

    def test_image_out_of_range(self, png_bytes):
        data = bytearray(ico.encode([IconFrame(16, 16, 1, png_bytes(16))]))
        struct.pack_into("<I", data, 6 + 8, 10_000)  # bytesInResource
        with pytest.raises(CorruptContainerError, match="out of range") as exc:
            ico.decode(bytes(data))
        assert exc.value.offset == 6

    def test_non_png_payload_is_kept(self, caplog):
        dib = b"\x28\x00\x00\x00" + b"\x00" * 36
        data = struct.pack("<HHH", 0, 1, 1) + struct.pack("<BBBBHHII", 16, 16, 0, 0, 1, 32, len(dib), 22) + dib
        with caplog.at_level("WARNING", logger="iconforge.codec"):
            frames = ico.decode(data)
        assert frames[0].pixels == dib
        assert "not PNG" in caplog.text
