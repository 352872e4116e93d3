from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the dbnav browser.

    Values are loaded from environment variables and `.env`.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data service
    DBNAV_SEED_FILE: Path | None = Field(default=None)
    # Seconds before a service call is abandoned; 0 waits forever.
    DBNAV_SERVICE_TIMEOUT: float = Field(default=0.0, ge=0)

    # Logging (file only; the terminal belongs to the menu)
    DBNAV_LOG_DIR: Path = Field(default=Path("_logs"))
    DBNAV_LOG_LEVEL: str = Field(default="INFO")
    DBNAV_LOG_BACKUP_COUNT: int = Field(default=14)


def load_settings() -> Settings:
    return Settings()
