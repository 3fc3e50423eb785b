from __future__ import annotations

import operator
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pixelbuf.core.convert import convert_pixels
from pixelbuf.core.pixel import PixelFormat
from pixelbuf.core.types import Color
from pixelbuf.utils.logger import Logger


def _read_only(a: NDArray[Any]) -> NDArray[Any]:
    v = a.view()
    v.flags.writeable = False
    return v


def _raw_scalars(data: Any, pixel: PixelFormat, n: int) -> NDArray[Any]:
    if isinstance(data, (bytes, bytearray, memoryview)):
        avail = memoryview(data).nbytes // pixel.dtype.itemsize
        if avail < n:
            raise ValueError(f"raw buffer holds {avail} scalars, expected {n}")
        return np.frombuffer(data, dtype=pixel.dtype, count=n)
    return np.asarray(data, dtype=pixel.dtype).reshape(-1)


class Image:
    """
    Image buffer of `width * height * plane_count` channel scalars.

    Storage is row-major and pixel-interleaved: pixel (col, row) starts at
    scalar `(col + row * width) * plane_count`, laid out in `pixel`'s plane
    order. Every Image owns its buffer; copies are deep and `move` empties
    the source.

    Image(pixel)                       empty 0x0 image
    Image(pixel, w, h)                 filled with opaque blue
    Image(pixel, w, h, data)           copied from raw scalars
    Image.from_image(pixel, other)     converted from any other image
    Image.move(other)                  takes over other's buffer
    """

    __slots__ = ("_pixel", "_width", "_height", "_data")

    def __init__(
        self, pixel: PixelFormat, width: int = 0, height: int = 0, data: Any = None
    ) -> None:
        if not isinstance(pixel, PixelFormat):
            raise TypeError(f"expected a PixelFormat, got {type(pixel).__name__}")
        width = operator.index(width)
        height = operator.index(height)
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")

        count = width * height
        if data is None:
            fill = Color(0, 0, pixel.max_value, pixel.max_value)
            buf = np.tile(pixel.encode(fill), count)
        else:
            raw = _raw_scalars(data, pixel, count * pixel.plane_count)
            buf = convert_pixels(raw, pixel, pixel, count)

        self._pixel = pixel
        self._width = width
        self._height = height
        self._data: NDArray[Any] = buf

    @classmethod
    def from_image(
        cls, pixel: PixelFormat, other: Image, log: Logger | None = None
    ) -> Image:
        img = cls(pixel)
        img.assign(other, log=log)
        return img

    @classmethod
    def _from_buffer(
        cls, pixel: PixelFormat, width: int, height: int, buf: NDArray[Any]
    ) -> Image:
        """Copy already-encoded scalars verbatim, without a decode/encode pass."""
        img = cls(pixel)
        raw = _raw_scalars(buf, pixel, width * height * pixel.plane_count)
        img._width = width
        img._height = height
        img._data = raw[: width * height * pixel.plane_count].copy()
        return img

    @classmethod
    def move(cls, other: Image) -> Image:
        img = cls(other.pixel)
        img.move_assign(other)
        return img

    def assign(self, other: Image, log: Logger | None = None) -> Image:
        """Replace contents with `other` converted to this image's format."""
        if other is self:
            return self
        if other.pixel == self._pixel:
            buf = other._data.copy()
        else:
            count = other.width * other.height
            buf = convert_pixels(other._data, other.pixel, self._pixel, count, log=log)
        self._width = other.width
        self._height = other.height
        self._data = buf
        return self

    def move_assign(self, other: Image) -> Image:
        if other is self:
            return self
        if other.pixel != self._pixel:
            raise TypeError(f"cannot move {other.pixel} image into {self._pixel} image")
        self._width, self._height, self._data = other._width, other._height, other._data
        other._width = 0
        other._height = 0
        other._data = np.empty(0, dtype=other.pixel.dtype)
        return self

    def copy(self) -> Image:
        img = type(self)(self._pixel)
        return img.assign(self)

    def __copy__(self) -> Image:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Image:
        return self.copy()

    def __repr__(self) -> str:
        return f"Image({self._pixel}, {self._width}x{self._height})"

    @property
    def pixel(self) -> PixelFormat:
        return self._pixel

    @property
    def dtype(self) -> np.dtype:
        return self._pixel.dtype

    @property
    def plane_count(self) -> int:
        return self._pixel.plane_count

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def data(self) -> NDArray[Any]:
        return _read_only(self._data)

    def as_array(self) -> NDArray[Any]:
        return _read_only(self._data).reshape(
            self._height, self._width, self.plane_count
        )

    def _offset(self, col: int, row: int) -> int:
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(
                f"pixel ({col}, {row}) outside {self._width}x{self._height} image"
            )
        return (col + row * self._width) * self.plane_count

    def get_color(self, col: int, row: int) -> Color:
        i = self._offset(col, row)
        return self._pixel.decode(self._data[i : i + self.plane_count])

    def set_color(self, col: int, row: int, color: Color) -> None:
        i = self._offset(col, row)
        self._data[i : i + self.plane_count] = self._pixel.encode(color)
