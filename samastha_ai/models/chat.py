"""
Chat request and response schemas.

Dependencies: pydantic
System role: Conversation API contracts
"""

from pydantic import BaseModel, Field

from samastha_ai.models.message import Message


class SendMessageRequest(BaseModel):
    """Request schema for a typed user turn."""

    text: str = Field(min_length=1, description="User message text")


class VoiceMessageRequest(BaseModel):
    """Request schema for a recorded voice turn."""

    audio_base64: str = Field(min_length=1, description="Base64 encoded audio")
    mime_type: str = Field(default="audio/webm", description="Audio MIME type")


class ConversationResponse(BaseModel):
    """Conversation snapshot."""

    id: str
    messages: list[Message]
    awaiting_contact: bool = Field(description="Next text turn is intercepted for lead capture")


class TurnResponse(BaseModel):
    """
    Outcome of one user turn.

    Attributes:
        reply: Message emitted by the assistant, None when the turn produced none
        suggested_input: Transcribed text to place in the input box instead of submitting
        conversation: Conversation snapshot after the turn
    """

    reply: Message | None = None
    suggested_input: str | None = None
    conversation: ConversationResponse


class SpeechRequest(BaseModel):
    """Request schema for speech synthesis."""

    text: str = Field(min_length=1)


class SpeechResponse(BaseModel):
    """Synthesized speech; audio is None when synthesis failed."""

    audio_base64: str | None = None
    sample_rate: int = 24000
