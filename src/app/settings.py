from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path

from src.app.errors import ConfigError
from src.pixel.hsla import HSLAPixel
from src.pixel.palette import get_color

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _get_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        v = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if v < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {v}")
    return v


@dataclass(frozen=True)
class Settings:
    max_stickers: int
    background: str
    output_dir: Path
    log_level: str
    host: str
    port: int

    def background_pixel(self) -> HSLAPixel:
        return get_color(self.background)


def load_settings() -> Settings:
    background = os.getenv("STICKERS_BACKGROUND", "white").strip().lower()
    try:
        get_color(background)
    except ValueError as e:
        raise ConfigError(f"STICKERS_BACKGROUND: {e}") from None

    log_level = os.getenv("STICKERS_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"STICKERS_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}")

    return Settings(
        max_stickers=_get_int("STICKERS_MAX", 8),
        background=background,
        output_dir=Path(os.getenv("STICKERS_OUTPUT_DIR", "output")),
        log_level=log_level,
        host=os.getenv("STICKERS_HOST", "127.0.0.1"),
        port=_get_int("STICKERS_PORT", 8000, minimum=1),
    )
