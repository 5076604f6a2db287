"""Application configuration and local storage bootstrap."""
from __future__ import annotations

import sqlite3
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    storage_path: Path = Field(default=Path("./doglicense/data/local_storage.db"), alias="STORAGE_PATH")
    draft_key: str = Field(default="dogLicenseFormData", alias="DRAFT_KEY")
    submissions_key: str = Field(default="dogLicenseApplications", alias="SUBMISSIONS_KEY")
    max_certificate_bytes: int = Field(default=5 * 1024 * 1024, gt=0, alias="MAX_CERTIFICATE_BYTES")
    rabies_validity_years: int = Field(default=3, ge=1, alias="RABIES_VALIDITY_YEARS")
    redirect_delay_s: float = Field(default=2.0, ge=0, alias="REDIRECT_DELAY_S")
    tracking_route: str = Field(default="/track-application", alias="TRACKING_ROUTE")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    ui_port: int = Field(default=8501, alias="UI_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def init_storage(path: Path | None = None) -> Path:
    """Create the sqlite file backing local storage and its key/value table."""

    path = (path or settings.storage_path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.commit()
    return path
