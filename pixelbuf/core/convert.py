from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pixelbuf._backend import backend
from pixelbuf.core.pixel import PixelFormat
from pixelbuf.core.scalar import convert_array, convert_color
from pixelbuf.utils.logger import NULL_LOGGER, Logger


def _convert_per_pixel(
    src: NDArray[Any], src_pixel: PixelFormat, dst_pixel: PixelFormat, count: int
) -> NDArray[Any]:
    spc = src_pixel.plane_count
    dpc = dst_pixel.plane_count
    out = np.empty(count * dpc, dtype=dst_pixel.dtype)
    for i in range(count):
        color = src_pixel.decode(src[i * spc : (i + 1) * spc])
        color = convert_color(color, dst_pixel.dtype, src_pixel.dtype)
        out[i * dpc : (i + 1) * dpc] = dst_pixel.encode(color)
    return out


def _convert_vectorized(
    src: NDArray[Any],
    src_pixel: PixelFormat,
    dst_pixel: PixelFormat,
    count: int,
    chunk: int,
) -> NDArray[Any]:
    spc = src_pixel.plane_count
    dpc = dst_pixel.plane_count
    out = np.empty(count * dpc, dtype=dst_pixel.dtype)
    planes = src[: count * spc].reshape(count, spc)
    dst = out.reshape(count, dpc)
    step = chunk if chunk > 0 else max(count, 1)
    for lo in range(0, count, step):
        hi = min(lo + step, count)
        colors = src_pixel.decode_array(planes[lo:hi])
        colors = convert_array(colors, dst_pixel.dtype, src_pixel.dtype)
        dst[lo:hi] = dst_pixel.encode_array(colors)
    return out


def convert_pixels(
    src: NDArray[Any],
    src_pixel: PixelFormat,
    dst_pixel: PixelFormat,
    count: int,
    log: Logger | None = None,
) -> NDArray[Any]:
    """
    Re-encode the first `count` pixels of a raw `src_pixel` buffer as a new
    raw `dst_pixel` buffer: decode, rescale every channel, encode.
    """
    if log is None:
        log = NULL_LOGGER
    src = np.asarray(src).reshape(-1)
    need = count * src_pixel.plane_count
    if src.size < need:
        raise ValueError(f"raw buffer holds {src.size} scalars, expected {need}")

    log.info(f"convert {src_pixel} -> {dst_pixel}: {count} px ({backend.name})")
    if backend.vectorized:
        return _convert_vectorized(
            src, src_pixel, dst_pixel, count, backend.chunk_pixels
        )
    return _convert_per_pixel(src, src_pixel, dst_pixel, count)
