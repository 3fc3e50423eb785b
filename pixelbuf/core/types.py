from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Final

import numpy as np
from numpy.typing import DTypeLike

CHANNELS: Final[tuple[str, ...]] = ("red", "green", "blue", "alpha")
CHANNEL_INDEX: Final[dict[str, int]] = {name: i for i, name in enumerate(CHANNELS)}


@dataclass(frozen=True, slots=True)
class Color:
    red: Any
    green: Any
    blue: Any
    alpha: Any

    def __iter__(self) -> Iterator[Any]:
        return iter((self.red, self.green, self.blue, self.alpha))

    def as_tuple(self) -> tuple[Any, Any, Any, Any]:
        return (self.red, self.green, self.blue, self.alpha)


def scalar_dtype(t: DTypeLike) -> np.dtype:
    """
    Normalize a channel type to a native-order numpy dtype.
    Only integer and floating dtypes are valid channel types.
    """
    dt = np.dtype(t)
    if not (np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating)):
        raise TypeError(f"unsupported channel type: {dt}")
    return dt.newbyteorder("=")


def is_float(t: DTypeLike) -> bool:
    return bool(np.issubdtype(np.dtype(t), np.floating))


def max_value(t: DTypeLike) -> np.generic:
    """Canonical "fully on" value: 1.0 for floats, the type maximum for integers."""
    dt = scalar_dtype(t)
    if is_float(dt):
        return dt.type(1.0)
    return dt.type(np.iinfo(dt).max)
