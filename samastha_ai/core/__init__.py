"""
Core business logic module.

Contains the retrieval pipeline, lead-capture state machine, live session
manager and the exception hierarchy. No web framework or database imports
live here.
"""

from samastha_ai.core.exceptions import (
    AssistantException,
    ChunkNotFoundError,
    ConversationNotFoundError,
    DimensionMismatchError,
    DocumentNotFoundError,
    EmbeddingError,
    GenerationError,
    LiveSessionError,
    TranscriptionError,
    UnsupportedDocumentTypeError,
    ValidationError,
)

__all__ = [
    "AssistantException",
    "ChunkNotFoundError",
    "ConversationNotFoundError",
    "DimensionMismatchError",
    "DocumentNotFoundError",
    "EmbeddingError",
    "GenerationError",
    "LiveSessionError",
    "TranscriptionError",
    "UnsupportedDocumentTypeError",
    "ValidationError",
]
