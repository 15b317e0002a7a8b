"""
Application settings root.

Nests one settings group per concern (database, Gemini, retrieval, live audio)
under a single object that the service cache reads at startup.

Dependencies: pydantic, samastha_ai.configs groups
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from samastha_ai.configs.base import BaseSettings
from samastha_ai.configs.database import DatabaseSettings
from samastha_ai.configs.gemini import GeminiSettings
from samastha_ai.configs.live_audio import LiveAudioSettings
from samastha_ai.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """All configuration for one running backend."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    live_audio: LiveAudioSettings = Field(default_factory=LiveAudioSettings)


@lru_cache
def get_settings() -> Settings:
    """Environment is read once; later calls return the same instance."""
    return Settings()
