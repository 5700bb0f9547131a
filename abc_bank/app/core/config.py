from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "ABC Bank API"
    database_url: str = "sqlite:///abc_bank.db"
    log_level: str = "INFO"
    storage_backend: Literal["sql", "file"] = "sql"
    data_dir: Path = Path("data")
    minimum_age: int = 18

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
