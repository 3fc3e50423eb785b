from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pytest

from pixelbuf._backend import backend
from pixelbuf.core.pixel import PixelFormat, pixel_format
from pixelbuf.io.config import load_settings


@dataclass(frozen=True, slots=True)
class BenchItem:
    name: str
    src: PixelFormat
    dst: PixelFormat


BENCH_ITEMS: tuple[BenchItem, ...] = (
    BenchItem("rgb8_to_bgra8", pixel_format("rgb"), pixel_format("bgra")),
    BenchItem("rgb8_to_rgbf32", pixel_format("rgb"), pixel_format("rgb", np.float32)),
    BenchItem("rgbaf32_to_rgba8", pixel_format("rgba", np.float32), pixel_format("rgba")),
    BenchItem("rgb8_to_gray8", pixel_format("rgb"), pixel_format("gray")),
    BenchItem("rgb16_to_rgb8", pixel_format("rgb", np.uint16), pixel_format("rgb")),
)


def pytest_addoption(parser: pytest.Parser) -> None:
    g = parser.getgroup("bench")
    g.addoption("--bench-size", action="store", type=int, default=128)
    g.addoption("--bench-rounds", action="store", type=int, default=5)
    g.addoption(
        "--bench-per-pixel",
        action="store_true",
        default=False,
        help="Also benchmark the per-pixel reference backend.",
    )


@pytest.fixture
def bench_size(pytestconfig: pytest.Config) -> int:
    return int(pytestconfig.getoption("--bench-size", default=128))


@pytest.fixture
def bench_rounds(pytestconfig: pytest.Config) -> int:
    return int(pytestconfig.getoption("--bench-rounds", default=5))


@pytest.fixture
def bench_per_pixel(pytestconfig: pytest.Config) -> bool:
    return bool(pytestconfig.getoption("--bench-per-pixel", default=False))


@pytest.fixture
def conversion_backend():
    saved = backend.settings

    def _use(vectorize: bool, chunk_pixels: int = 0) -> None:
        backend.configure(load_settings(vectorize=vectorize, chunk_pixels=chunk_pixels))

    yield _use
    backend.configure(saved)
