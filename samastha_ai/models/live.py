"""
Live voice WebSocket event schemas.

Defines event types and payloads exchanged between the browser (microphone
and speaker) and the server-side live session.

Dependencies: pydantic
System role: Live streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class LiveServerEventType(str, Enum):
    """Server-to-client event types for the live channel."""

    CONNECTED = "connected"
    STATE = "state"
    AUDIO = "audio"
    TOOL_CALL = "tool_call"
    CLOSED = "closed"
    ERROR = "error"
    PONG = "pong"


class LiveClientEventType(str, Enum):
    """Client-to-server event types."""

    AUDIO = "audio"
    STOP = "stop"
    PING = "ping"


class LiveEvent(BaseModel):
    """
    Live channel event envelope.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: LiveServerEventType
    data: dict[str, Any] = {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}


class ClientAudioEvent(BaseModel):
    """
    Captured microphone frame sent by the browser.

    Exactly one of the two payloads is expected.

    Attributes:
        samples: Float samples in [-1, 1] captured at 16 kHz
        pcm: Base64 PCM16 little-endian bytes already encoded by the client
    """

    samples: list[float] | None = None
    pcm: str | None = None


class ScheduledAudio(BaseModel):
    """
    Playback instruction for one inbound audio frame.

    Attributes:
        pcm: Base64 PCM16 payload as received from the model
        start_at: Playback start on the session clock (seconds)
        duration: Frame duration (seconds)
        sample_rate: Sample rate of the payload
    """

    pcm: str
    start_at: float
    duration: float
    sample_rate: int
