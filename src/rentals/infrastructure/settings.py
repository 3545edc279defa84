"""Runtime configuration, read from ``RENTALS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Editable installs resolve this to the repository root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

# Order in which the availability screen lists products; the rest follow by name.
DEFAULT_DISPLAY_ORDER = (
    "Cubremantel",
    "Moño",
    "Lona 10x7",
    "Lona 10x15",
    "Módulo 6x3",
    "Módulo 6x6",
    "Módulo 6x8",
    "Silla",
    "Silla Infantil",
    "Funda para Silla",
    "Tablón",
    "Tablón Infantil",
    "Mesa Redonda",
    "Mesa Cuadrada 1x1",
    "Mantel Largo",
    "Mantel Redondo",
    "Mantel Infantil",
    "Charola",
    "Tarima",
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RENTALS_", env_file=".env", extra="ignore"
    )

    backend: Literal["json", "rest"] = "json"
    data_dir: Path = _DEFAULT_DATA_DIR
    rest_url: str | None = None
    rest_key: str | None = None
    rest_timeout: float = 10.0
    fail_open: bool = False
    log_level: str = "WARNING"
    display_order: tuple[str, ...] = DEFAULT_DISPLAY_ORDER


@lru_cache
def get_settings() -> Settings:
    return Settings()
