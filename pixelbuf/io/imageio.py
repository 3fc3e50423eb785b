from __future__ import annotations

import numpy as np
from PIL import Image as PILImage

from pixelbuf.core.image import Image
from pixelbuf.core.pixel import (
    GRAY8,
    RGB8,
    RGBA8,
    PixelBGRA,
    PixelFormat,
    PixelGray,
    PixelRGBA,
)

_FROM_MODE: dict[str, PixelFormat] = {"L": GRAY8, "RGB": RGB8, "RGBA": RGBA8}


def _pil_target(pixel: PixelFormat) -> PixelFormat:
    if isinstance(pixel, PixelGray):
        return GRAY8
    if isinstance(pixel, (PixelRGBA, PixelBGRA)):
        return RGBA8
    return RGB8


def to_pil(image: Image) -> PILImage.Image:
    target = _pil_target(image.pixel)
    src = image if image.pixel == target else Image.from_image(target, image)
    arr = src.as_array()
    if target == GRAY8:
        arr = arr[:, :, 0]
    return PILImage.fromarray(np.array(arr))


def from_pil(img: PILImage.Image, pixel: PixelFormat | None = None) -> Image:
    if img.mode not in _FROM_MODE:
        img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
    fmt = _FROM_MODE[img.mode]
    out = Image._from_buffer(fmt, img.width, img.height, np.asarray(img))
    if pixel is None or pixel == fmt:
        return out
    return Image.from_image(pixel, out)
