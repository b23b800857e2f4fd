"""Runtime settings, read from ``WMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WMS_", env_file=".env", extra="ignore")

    # JSON stores
    data_dir: Path = Path("data")

    # Upper bound on waiting for a product or order lock before BusyError
    lock_timeout_seconds: float = 5.0

    order_number_prefix: str = "ORD"

    log_level: str = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
