"""
Gemini provider configuration settings.

Model identifiers and voices for every call made to the Gemini API:
embedding, grounded generation, transcription, speech synthesis and the
live duplex audio session.

Dependencies: pydantic, pydantic_settings
System role: Generative provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from samastha_ai.configs.base import ENV_FILE, BaseSettings


class GeminiSettings(BaseSettings):
    """Google Gemini API configuration."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Model for grounded answers and detailed reports",
    )
    embedding_model: str = Field(
        default="text-embedding-004",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Expected embedding vector dimension",
    )
    transcription_model: str = Field(
        default="gemini-2.5-flash",
        description="Model for verbatim audio transcription",
    )
    tts_model: str = Field(
        default="gemini-2.5-flash-preview-tts",
        description="Model for speech synthesis",
    )
    tts_voice: str = Field(default="Kore", description="Prebuilt voice for speech synthesis")
    live_model: str = Field(
        default="gemini-2.5-flash-native-audio-preview-09-2025",
        description="Model for the live duplex audio session",
    )
    live_voice: str = Field(default="Zephyr", description="Prebuilt voice for live sessions")
