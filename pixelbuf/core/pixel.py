from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Final

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pixelbuf.core.types import CHANNEL_INDEX, Color, max_value, scalar_dtype

LUMA_R: Final[float] = 0.299
LUMA_G: Final[float] = 0.587
LUMA_B: Final[float] = 0.114


def _luma_dtype(dtype: np.dtype) -> np.dtype:
    if dtype == np.dtype(np.longdouble):
        return dtype
    return np.dtype(np.float64)


def luma(r: Any, g: Any, b: Any, dtype: DTypeLike) -> NDArray[Any]:
    """
    0.299*R + 0.587*G + 0.114*B, cast to `dtype` (truncating for integers).
    Works element-wise on arrays and on single values alike.
    """
    dt = scalar_dtype(dtype)
    work = _luma_dtype(dt)
    y = (
        LUMA_R * np.asarray(r).astype(work)
        + LUMA_G * np.asarray(g).astype(work)
        + LUMA_B * np.asarray(b).astype(work)
    )
    with np.errstate(invalid="ignore", over="ignore"):
        return np.asarray(y).astype(dt)


@dataclass(frozen=True, slots=True)
class PixelFormat:
    """
    Layout of one pixel in raw storage for a given channel type.

    `planes` names, in storage order, the Color channel held by each plane.
    Channels absent from `planes` decode as `max_value` (alpha only).
    """

    dtype: np.dtype

    name: ClassVar[str] = ""
    planes: ClassVar[tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dtype", scalar_dtype(self.dtype))

    def __str__(self) -> str:
        return f"{self.name}<{self.dtype.name}>"

    @property
    def plane_count(self) -> int:
        return len(self.planes)

    @property
    def max_value(self) -> np.generic:
        return max_value(self.dtype)

    def decode(self, raw: NDArray[Any]) -> Color:
        values = dict(zip(self.planes, raw))
        amax = self.max_value
        return Color(
            red=values["red"],
            green=values["green"],
            blue=values["blue"],
            alpha=values.get("alpha", amax),
        )

    def encode(self, color: Color) -> NDArray[Any]:
        return np.array([getattr(color, p) for p in self.planes], dtype=self.dtype)

    def decode_array(self, raw: NDArray[Any]) -> NDArray[Any]:
        """(N, plane_count) planes -> (N, 4) colors in red, green, blue, alpha order."""
        raw = np.asarray(raw).reshape(-1, self.plane_count)
        out = np.empty((raw.shape[0], 4), dtype=self.dtype)
        out[:, CHANNEL_INDEX["alpha"]] = self.max_value
        for i, p in enumerate(self.planes):
            out[:, CHANNEL_INDEX[p]] = raw[:, i]
        return out

    def encode_array(self, colors: NDArray[Any]) -> NDArray[Any]:
        idx = [CHANNEL_INDEX[p] for p in self.planes]
        return np.asarray(colors)[:, idx].astype(self.dtype, copy=False)


class PixelRGB(PixelFormat):
    name = "RGB"
    planes = ("red", "green", "blue")


class PixelBGR(PixelFormat):
    name = "BGR"
    planes = ("blue", "green", "red")


class PixelRGBA(PixelFormat):
    name = "RGBA"
    planes = ("red", "green", "blue", "alpha")


class PixelBGRA(PixelFormat):
    name = "BGRA"
    planes = ("blue", "green", "red", "alpha")


class PixelGray(PixelFormat):
    name = "Gray"
    planes = ("luma",)

    def decode(self, raw: NDArray[Any]) -> Color:
        v = raw[0]
        return Color(red=v, green=v, blue=v, alpha=self.max_value)

    def encode(self, color: Color) -> NDArray[Any]:
        y = luma(color.red, color.green, color.blue, self.dtype)
        return np.asarray(y).reshape(1)

    def decode_array(self, raw: NDArray[Any]) -> NDArray[Any]:
        raw = np.asarray(raw).reshape(-1, 1)
        out = np.empty((raw.shape[0], 4), dtype=self.dtype)
        out[:, :3] = raw
        out[:, 3] = self.max_value
        return out

    def encode_array(self, colors: NDArray[Any]) -> NDArray[Any]:
        c = np.asarray(colors)
        return luma(c[:, 0], c[:, 1], c[:, 2], self.dtype).reshape(-1, 1)


FORMATS: Final[dict[str, type[PixelFormat]]] = {
    "rgb": PixelRGB,
    "bgr": PixelBGR,
    "rgba": PixelRGBA,
    "bgra": PixelBGRA,
    "gray": PixelGray,
}


def pixel_format(name: str, dtype: DTypeLike = np.uint8) -> PixelFormat:
    cls = FORMATS.get(name.strip().lower())
    if cls is None:
        raise ValueError(f"unknown pixel format: {name!r}")
    return cls(dtype)


RGB8: Final[PixelFormat] = PixelRGB(np.uint8)
BGR8: Final[PixelFormat] = PixelBGR(np.uint8)
RGBA8: Final[PixelFormat] = PixelRGBA(np.uint8)
BGRA8: Final[PixelFormat] = PixelBGRA(np.uint8)
GRAY8: Final[PixelFormat] = PixelGray(np.uint8)
