"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from liftlog.core.constants import DEFAULT_STORE_FILENAME


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_prefix="LIFTLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "LiftLog"
    debug: bool = False
    log_level: str = "INFO"

    # Storage (single local JSON document)
    data_dir: Path = Path.home() / ".liftlog"
    store_filename: str = DEFAULT_STORE_FILENAME

    # Write snapshots from a worker thread so store operations never block on disk
    persist_in_background: bool = True

    @property
    def store_path(self) -> Path:
        """Full path of the persisted state document."""
        return self.data_dir.expanduser() / self.store_filename


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
