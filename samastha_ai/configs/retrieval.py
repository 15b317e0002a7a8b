"""
Retrieval configuration settings.

Chunk sizing and top-K limits for the three retrieval flows.

Dependencies: pydantic, pydantic_settings
System role: Retrieval pipeline configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from samastha_ai.configs.base import ENV_FILE, BaseSettings


class RetrievalSettings(BaseSettings):
    """Chunking and nearest-neighbour configuration."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    max_chunk_size: int = Field(default=500, gt=0, description="Maximum chunk size in characters")
    top_k: int = Field(default=5, ge=1, description="Chunks retrieved for a normal turn")
    report_top_k: int = Field(default=8, ge=1, description="Chunks retrieved for a detailed report")
    live_top_k: int = Field(default=3, ge=1, description="Chunks retrieved for a live tool call")
