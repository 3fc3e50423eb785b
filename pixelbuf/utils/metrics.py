from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pixelbuf.core.image import Image
from pixelbuf.core.scalar import convert_array


def normalized(image: Image) -> NDArray[np.float64]:
    """(height, width, 4) colors rescaled to the float64 [0, 1] range."""
    colors = image.pixel.decode_array(image.data)
    out = convert_array(colors, np.float64, image.dtype)
    return np.asarray(out, dtype=np.float64).reshape(image.height, image.width, 4)


def _diff(a: Image, b: Image) -> NDArray[np.float64]:
    if (a.width, a.height) != (b.width, b.height):
        raise ValueError("images must have the same width and height")
    return normalized(a) - normalized(b)


def mse(a: Image, b: Image) -> float:
    d = _diff(a, b)
    if d.size == 0:
        return 0.0
    return float(np.mean(d * d))


def psnr(a: Image, b: Image) -> float:
    v = mse(a, b)
    if v <= 0.0:
        return 99.0
    return float(10.0 * np.log10(1.0 / v))


def max_abs_error(a: Image, b: Image) -> float:
    d = _diff(a, b)
    if d.size == 0:
        return 0.0
    return float(np.max(np.abs(d)))
