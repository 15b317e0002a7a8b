"""
Database configuration settings.

Manages the SQLAlchemy connection URL for the knowledge store.
Defaults to a local SQLite file standing in for a real database.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from samastha_ai.configs.base import ENV_FILE, BaseSettings


class DatabaseSettings(BaseSettings):
    """Knowledge store database configuration."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite:///./samastha_ai.db",
        description="SQLAlchemy database URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite."""
        return self.url.startswith("sqlite")
