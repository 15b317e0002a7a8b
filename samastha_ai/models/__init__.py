"""
Pydantic models for API contracts and domain records.

Dependencies: pydantic
System role: Data validation and serialization
"""

from samastha_ai.models.app_settings import AppSettings, PublicAppSettings, SettingsVersionResponse
from samastha_ai.models.chat import (
    ConversationResponse,
    SendMessageRequest,
    SpeechRequest,
    SpeechResponse,
    TurnResponse,
    VoiceMessageRequest,
)
from samastha_ai.models.chunk import Chunk, ChunkResponse, ChunkTextUpdate
from samastha_ai.models.common import ErrorResponse
from samastha_ai.models.document import (
    Document,
    DocumentListResponse,
    DocumentTagsUpdate,
    IngestionResult,
    IngestTextRequest,
)
from samastha_ai.models.lead import Lead, LeadListResponse
from samastha_ai.models.message import Message, MessageRole

__all__ = [
    "AppSettings",
    "Chunk",
    "ChunkResponse",
    "ChunkTextUpdate",
    "ConversationResponse",
    "Document",
    "DocumentListResponse",
    "DocumentTagsUpdate",
    "ErrorResponse",
    "IngestTextRequest",
    "IngestionResult",
    "Lead",
    "LeadListResponse",
    "Message",
    "MessageRole",
    "PublicAppSettings",
    "SendMessageRequest",
    "SettingsVersionResponse",
    "SpeechRequest",
    "SpeechResponse",
    "TurnResponse",
    "VoiceMessageRequest",
]
