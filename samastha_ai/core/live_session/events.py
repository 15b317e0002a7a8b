"""
Tagged inbound events for the live voice session.

The provider adapter decodes every server message into one of these
variants; the session manager dispatches on type.

Dependencies: None (pure domain layer)
System role: Live session event vocabulary
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LiveSessionState(str, Enum):
    """Lifecycle of one live session."""

    CLOSED = "closed"
    CONNECTING = "connecting"
    OPEN = "open"


@dataclass(frozen=True)
class AudioFrame:
    """PCM16 little-endian mono audio from the model."""

    data: bytes


@dataclass(frozen=True)
class ToolCall:
    """Function call issued by the model, answered by id."""

    id: str | None
    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SessionClosed:
    """Remote endpoint closed the session."""

    reason: str | None = None


@dataclass(frozen=True)
class SessionError:
    """Provider reported an error on the open session."""

    message: str


LiveInboundEvent = AudioFrame | ToolCall | SessionClosed | SessionError
