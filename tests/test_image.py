from __future__ import annotations

import copy

import numpy as np
import pytest

import pixelbuf.core.image as image_mod
from pixelbuf.core.image import Image
from pixelbuf.core.pixel import (
    BGR8,
    GRAY8,
    RGB8,
    RGBA8,
    PixelBGRA,
    PixelRGB,
)
from pixelbuf.core.types import Color


def _ramp(pixel, width: int, height: int) -> Image:
    n = width * height * pixel.plane_count
    return Image(pixel, width, height, np.arange(n) % 251)


def test_empty_image():
    img = Image(RGB8)
    assert img.width == 0
    assert img.height == 0
    assert img.data.size == 0
    assert img.data.dtype == np.uint8


@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (0, 0)])
def test_zero_dimensions_give_empty_buffer(w, h):
    img = Image(RGBA8, w, h)
    assert (img.width, img.height) == (w, h)
    assert img.data.size == 0
    assert img.as_array().shape == (h, w, 4)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Image(RGB8, -1, 3)


def test_requires_pixel_format():
    with pytest.raises(TypeError):
        Image("rgb", 1, 1)


@pytest.mark.parametrize("w,h", [(2.5, 1), (1, 2.0), ("3", 1)])
def test_non_integer_dimensions_rejected(w, h):
    with pytest.raises(TypeError):
        Image(RGB8, w, h)


def test_numpy_integer_dimensions_accepted():
    img = Image(RGB8, np.int64(2), np.uint8(3))
    assert (img.width, img.height) == (2, 3)
    assert img.data.size == 2 * 3 * 3


def test_default_fill_is_opaque_blue():
    img = Image(RGB8, 3, 2)
    assert img.data.size == 3 * 2 * 3
    assert img.data.tolist() == [0, 0, 255] * 6
    for row in range(2):
        for col in range(3):
            assert img.get_color(col, row) == Color(0, 0, 255, 255)


def test_default_fill_respects_layout_and_type():
    img = Image(PixelBGRA(np.float32), 2, 1)
    assert img.data.dtype == np.float32
    assert img.data.tolist() == [1.0, 0.0, 0.0, 1.0] * 2
    gray = Image(GRAY8, 2, 2)
    assert gray.data.tolist() == [29] * 4


def test_from_raw_rgba_single_pixel():
    img = Image(RGBA8, 1, 1, [128, 0, 128, 255])
    assert img.get_color(0, 0) == Color(red=128, green=0, blue=128, alpha=255)


def test_from_raw_bytes():
    img = Image(BGR8, 2, 1, bytes([1, 2, 3, 4, 5, 6]))
    assert img.get_color(0, 0) == Color(3, 2, 1, 255)
    assert img.get_color(1, 0) == Color(6, 5, 4, 255)
    assert img.data.tolist() == [1, 2, 3, 4, 5, 6]


def test_from_raw_ignores_trailing_scalars():
    img = Image(RGB8, 1, 1, [9, 8, 7, 6, 5])
    assert img.data.tolist() == [9, 8, 7]


def test_from_raw_short_buffer_rejected():
    with pytest.raises(ValueError):
        Image(RGB8, 2, 2, [1, 2, 3])
    with pytest.raises(ValueError):
        Image(RGBA8, 1, 1, b"\x01\x02")


def test_from_raw_does_not_alias_source():
    raw = np.array([1, 2, 3, 4, 5, 6], dtype=np.uint8)
    img = Image(RGB8, 2, 1, raw)
    raw[:] = 0
    assert img.data.tolist() == [1, 2, 3, 4, 5, 6]


def test_from_raw_gray_reserializes_through_luma():
    raw = np.arange(0, 256, dtype=np.uint8)
    img = Image(GRAY8, 16, 16, raw)
    expected = [int(GRAY8.encode(GRAY8.decode(raw[i : i + 1]))[0]) for i in range(256)]
    assert img.data.tolist() == expected


def test_row_major_indexing():
    img = Image(RGB8, 3, 2)
    img.set_color(1, 0, Color(10, 20, 30, 255))
    img.set_color(0, 1, Color(40, 50, 60, 255))
    data = img.data.tolist()
    assert data[3:6] == [10, 20, 30]
    assert data[9:12] == [40, 50, 60]
    assert img.as_array()[1, 0].tolist() == [40, 50, 60]


def test_set_color_drops_alpha_for_three_plane_formats():
    img = Image(RGB8, 1, 1)
    img.set_color(0, 0, Color(1, 2, 3, 4))
    assert img.get_color(0, 0) == Color(1, 2, 3, 255)


@pytest.mark.parametrize("col,row", [(3, 0), (0, 2), (-1, 0), (0, -1)])
def test_out_of_range_coordinates(col, row):
    img = Image(RGB8, 3, 2)
    with pytest.raises(IndexError):
        img.get_color(col, row)
    with pytest.raises(IndexError):
        img.set_color(col, row, Color(0, 0, 0, 0))


def test_data_is_read_only():
    img = Image(RGB8, 2, 2)
    with pytest.raises(ValueError):
        img.data[0] = 7
    with pytest.raises(ValueError):
        img.as_array()[0, 0, 0] = 7


def test_copy_is_independent():
    src = _ramp(RGB8, 4, 3)
    for dup in (src.copy(), copy.copy(src), copy.deepcopy(src)):
        before = dup.data.tolist()
        src.set_color(0, 0, Color(255, 255, 255, 255))
        assert dup.data.tolist() == before
        src.set_color(0, 0, Color(0, 1, 2, 255))


def test_assign_same_format_copies_verbatim():
    src = _ramp(GRAY8, 5, 4)
    dst = Image(GRAY8, 1, 1)
    assert dst.assign(src) is dst
    assert (dst.width, dst.height) == (5, 4)
    assert dst.data.tolist() == src.data.tolist()
    src.set_color(0, 0, Color(200, 200, 200, 255))
    assert dst.get_color(0, 0) != src.get_color(0, 0)


def test_self_assign_is_noop():
    img = _ramp(RGBA8, 3, 3)
    before = [img.get_color(c, r) for r in range(3) for c in range(3)]
    data = img.data
    assert img.assign(img) is img
    assert [img.get_color(c, r) for r in range(3) for c in range(3)] == before
    assert np.shares_memory(img.data, data)


def test_assign_converts_and_resizes():
    src = Image(RGB8, 4, 2, list(range(24)))
    dst = Image(PixelBGRA(np.uint8), 1, 1)
    dst.assign(src)
    assert (dst.width, dst.height) == (4, 2)
    assert dst.data.size == 4 * 2 * 4
    for row in range(2):
        for col in range(4):
            assert dst.get_color(col, row) == src.get_color(col, row)


def test_failed_assign_leaves_target_unchanged(monkeypatch):
    dst = _ramp(RGB8, 2, 2)
    before = dst.data.tolist()

    def boom(*args, **kwargs):
        raise MemoryError("no room")

    monkeypatch.setattr(image_mod, "convert_pixels", boom)
    with pytest.raises(MemoryError):
        dst.assign(Image(RGBA8, 8, 8))
    assert (dst.width, dst.height) == (2, 2)
    assert dst.data.tolist() == before


def test_move_transfers_buffer():
    src = _ramp(RGB8, 3, 2)
    expected = src.data.tolist()
    dst = Image.move(src)
    assert (dst.width, dst.height) == (3, 2)
    assert dst.data.tolist() == expected
    assert (src.width, src.height) == (0, 0)
    assert src.data.size == 0


def test_move_assign():
    src = _ramp(RGBA8, 2, 2)
    expected = src.data.tolist()
    dst = Image(RGBA8, 7, 7)
    assert dst.move_assign(src) is dst
    assert dst.data.tolist() == expected
    assert (src.width, src.height, src.data.size) == (0, 0, 0)
    # the emptied source is still a usable image
    src.assign(dst)
    assert src.data.tolist() == expected


def test_self_move_assign_is_noop():
    img = _ramp(RGB8, 2, 2)
    before = img.data.tolist()
    img.move_assign(img)
    assert img.data.tolist() == before


def test_move_requires_same_format():
    src = Image(RGB8, 1, 1)
    with pytest.raises(TypeError):
        Image(PixelRGB(np.float32)).move_assign(src)
    with pytest.raises(TypeError):
        Image(BGR8).move_assign(src)
    assert src.width == 1


def test_repr_and_properties():
    img = Image(PixelRGB(np.float32), 4, 3)
    assert repr(img) == "Image(RGB<float32>, 4x3)"
    assert img.dtype == np.float32
    assert img.plane_count == 3
    assert img.pixel == PixelRGB(np.float32)
