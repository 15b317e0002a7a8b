"""
Conversation message model.

Messages are immutable; a conversation's history is an ordered tuple that
only ever grows.

Dependencies: pydantic
System role: Chat message data structure
"""

from datetime import datetime, timezone
from enum import Enum
import uuid

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Author of a message."""

    USER = "user"
    MODEL = "model"


class Message(BaseModel):
    """Single chat message."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    language: str | None = Field(default=None, description="Detected language tag")
    citations: tuple[str, ...] | None = Field(default=None, description="Citation labels")
    is_audio: bool = Field(default=False, description="Originated from voice input")
    share_content: str | None = Field(default=None, description="Plain-text shareable variant")

    @classmethod
    def user(cls, content: str, is_audio: bool = False) -> "Message":
        return cls(role=MessageRole.USER, content=content, is_audio=is_audio)

    @classmethod
    def model(cls, content: str, **kwargs) -> "Message":
        return cls(role=MessageRole.MODEL, content=content, **kwargs)
