from __future__ import annotations

from dataclasses import replace

from pixelbuf.io.config import Settings, load_settings


class ConversionBackend:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings if settings is not None else load_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def vectorized(self) -> bool:
        return self._settings.vectorize

    @property
    def chunk_pixels(self) -> int:
        return self._settings.chunk_pixels

    @property
    def name(self) -> str:
        return "vectorized" if self.vectorized else "per-pixel"

    def configure(self, settings: Settings) -> None:
        self._settings = settings

    def set_vectorized(self, enabled: bool) -> None:
        """Optional runtime override (rarely needed)."""
        self._settings = replace(self._settings, vectorize=bool(enabled))


backend = ConversionBackend()


def configure(settings: Settings) -> None:
    backend.configure(settings)
