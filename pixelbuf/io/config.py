from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

ENV_VECTORIZE = "PIXELBUF_VECTORIZE"
ENV_CHUNK_PIXELS = "PIXELBUF_CHUNK_PIXELS"

_TRUE = ("true", "True", "TRUE", "1", "yes", "Yes", "YES", "on", "On", "ON")
_FALSE = ("false", "False", "FALSE", "0", "no", "No", "NO", "off", "Off", "OFF")


@dataclass(frozen=True, slots=True)
class Settings:
    vectorize: bool = True
    chunk_pixels: int = 0


def env_flag(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    v = v.strip()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return default


def env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v.strip())
    except ValueError:
        raise ValueError(f"invalid int in {name}: {v!r}") from None


def get_section(cfg: Mapping[str, object], name: str) -> Mapping[str, object]:
    v = cfg.get(name)
    if v is None:
        return {}
    if not isinstance(v, Mapping):
        raise ValueError("config section must be a mapping")
    return v


def pick_bool(
    cfg: Mapping[str, object], key: str, override: bool | None, default: bool
) -> bool:
    if override is not None:
        return bool(override)
    v = cfg.get(key)
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, int) and v in (0, 1):
        return bool(v)
    if isinstance(v, str):
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    raise ValueError("invalid bool in config")


def pick_int(
    cfg: Mapping[str, object], key: str, override: int | None, default: int
) -> int:
    if override is not None:
        return int(override)
    v = cfg.get(key)
    if v is None:
        return default
    if isinstance(v, bool):
        raise ValueError("invalid int in config")
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str):
        try:
            return int(v)
        except ValueError:
            raise ValueError("invalid int in config") from None
    raise ValueError("invalid int in config")


def load_settings(
    cfg: Mapping[str, object] | None = None,
    *,
    vectorize: bool | None = None,
    chunk_pixels: int | None = None,
) -> Settings:
    """
    Resolve conversion settings.

    Precedence: keyword override, then the "conversion" section of `cfg`,
    then PIXELBUF_* environment variables, then the defaults.
    """
    sec = get_section(cfg or {}, "conversion")
    vec = pick_bool(sec, "vectorize", vectorize, env_flag(ENV_VECTORIZE, True))
    chunk = pick_int(sec, "chunk_pixels", chunk_pixels, env_int(ENV_CHUNK_PIXELS, 0))
    if chunk < 0:
        raise ValueError("chunk_pixels must be >= 0")
    return Settings(vectorize=vec, chunk_pixels=chunk)
