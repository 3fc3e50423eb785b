from __future__ import annotations

from pixelbuf.core.image import Image
from pixelbuf.core.pixel import (
    BGR8,
    BGRA8,
    GRAY8,
    RGB8,
    RGBA8,
    PixelBGR,
    PixelBGRA,
    PixelFormat,
    PixelGray,
    PixelRGB,
    PixelRGBA,
    pixel_format,
)
from pixelbuf.core.scalar import convert
from pixelbuf.core.types import Color, max_value

__all__ = [
    "Color",
    "Image",
    "PixelFormat",
    "PixelRGB",
    "PixelBGR",
    "PixelRGBA",
    "PixelBGRA",
    "PixelGray",
    "RGB8",
    "BGR8",
    "RGBA8",
    "BGRA8",
    "GRAY8",
    "convert",
    "max_value",
    "pixel_format",
]
