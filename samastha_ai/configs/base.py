"""
Shared settings foundation.

Every settings group reads the same .env file and ignores keys it does not
own; the groups differ only in their env prefix. The unprefixed fields here
(ENVIRONMENT, DEBUG, LOG_LEVEL, SEED_DEMO_DATA) apply to the whole process.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


class BaseSettings(PydanticBaseSettings):
    """Process-wide switches inherited by every settings group."""

    model_config = SettingsConfigDict(env_file=ENV_FILE, env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    environment: str = Field(default="development", description="Deployment name: development, staging or production")
    debug: bool = Field(default=False, description="Turns on uvicorn reload and verbose errors")
    log_level: str = Field(default="INFO", description="Root log level name")
    seed_demo_data: bool = Field(
        default=True,
        description="Insert the history overview document when the knowledge store is empty",
    )
