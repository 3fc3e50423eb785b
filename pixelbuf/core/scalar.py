from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pixelbuf.core.types import Color, is_float, max_value, scalar_dtype

# Values outside a type's canonical range are rescaled like any other value and
# then narrowed; nothing is clamped. Integer narrowing wraps (two's complement),
# float -> int narrowing of out-of-range values follows the platform cast.


def _wrap_int(q: NDArray[Any], target: np.dtype) -> NDArray[Any]:
    bits = target.itemsize * 8
    full = 1 << bits
    q = q % full
    if np.issubdtype(target, np.signedinteger):
        q = np.where(q >= full >> 1, q - full, q).astype(object)
    return q.astype(target)


def _convert_int_int(
    values: NDArray[Any], target: np.dtype, source: np.dtype
) -> NDArray[Any]:
    # 0-d object arrays decay to Python ints under arithmetic; stay 1-d
    shape = np.shape(values)
    tmax = int(max_value(target))
    smax = int(max_value(source))
    v = np.asarray(values).astype(object).reshape(-1)
    mag = np.abs(v) * tmax // smax
    q = np.where(v < 0, -mag, mag).astype(object)
    return _wrap_int(q, target).reshape(shape)


def _convert_real(
    values: NDArray[Any], target: np.dtype, source: np.dtype
) -> NDArray[Any]:
    work = np.dtype(np.longdouble)
    tmax = np.asarray(max_value(target)).astype(work)
    smax = np.asarray(max_value(source)).astype(work)
    with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
        y = np.asarray(values).astype(work) * tmax / smax
        if not is_float(target):
            y = np.trunc(y)
        return np.asarray(y).astype(target)


def convert_array(
    values: NDArray[Any], target: DTypeLike, source: DTypeLike
) -> NDArray[Any]:
    """
    Rescale an array of channel values from the canonical range of `source`
    to the canonical range of `target`: value * max(target) / max(source).

    Integer pairs use exact integer arithmetic truncated toward zero; any pair
    involving a floating type is computed in longdouble. Identity when the
    types match.
    """
    t = scalar_dtype(target)
    s = scalar_dtype(source)
    if t == s:
        return values
    if is_float(t) or is_float(s):
        return _convert_real(values, t, s)
    return _convert_int_int(values, t, s)


def convert(value: Any, target: DTypeLike, source: DTypeLike) -> Any:
    t = scalar_dtype(target)
    s = scalar_dtype(source)
    if t == s:
        return value
    return convert_array(np.asarray(value, dtype=s).reshape(1), t, s)[0]


def convert_color(color: Color, target: DTypeLike, source: DTypeLike) -> Color:
    return Color(*(convert(ch, target, source) for ch in color))
