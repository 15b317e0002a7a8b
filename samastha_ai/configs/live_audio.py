"""
Live audio configuration settings.

Sample rates and frame size for the duplex voice session.

Dependencies: pydantic, pydantic_settings
System role: Live session audio configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from samastha_ai.configs.base import ENV_FILE, BaseSettings


class LiveAudioSettings(BaseSettings):
    """Microphone capture and playback parameters."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="LIVE_AUDIO_",
        case_sensitive=False,
        extra="ignore",
    )

    input_sample_rate: int = Field(default=16000, description="Capture sample rate (Hz)")
    output_sample_rate: int = Field(default=24000, description="Playback sample rate (Hz)")
    frame_size: int = Field(default=4096, description="Samples per outbound frame")
