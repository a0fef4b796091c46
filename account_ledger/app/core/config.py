from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from ``LEDGER_*`` variables or a ``.env`` file."""

    app_name: str = "Account Ledger API"
    log_level: str = "INFO"

    database_url: str = "sqlite:///account_ledger.db"
    database_echo: bool = Field(default=False, description="Log every SQL statement")
    # Writers on SQLite queue on the file lock; wait this long before failing.
    sqlite_busy_timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LEDGER_",
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
