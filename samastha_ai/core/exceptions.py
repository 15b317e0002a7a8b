"""
Domain errors raised by the assistant.

Every error carries a human-readable message plus a details mapping that the
REST layer returns verbatim in ErrorResponse.details; the router decorator
picks the HTTP status from the concrete class.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AssistantException(Exception):
    """Root of the hierarchy; catch this to handle any domain failure."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ValidationError(AssistantException):
    """Caller input rejected before any state changed."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        if field:
            self.details["field"] = field


class _NotFoundError(AssistantException):
    """Lookup by public identifier found nothing."""

    kind = "Record"
    key = "id"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"{self.kind} not found: {identifier}", {self.key: identifier})


class DocumentNotFoundError(_NotFoundError):
    kind = "Document"
    key = "document_id"


class ChunkNotFoundError(_NotFoundError):
    kind = "Chunk"
    key = "chunk_id"


class ConversationNotFoundError(_NotFoundError):
    kind = "Conversation"
    key = "conversation_id"


class UnsupportedDocumentTypeError(AssistantException):
    """Upload that is neither plain text nor markdown."""

    def __init__(self, filename: str | None, content_type: str | None) -> None:
        super().__init__(
            "Only plain text (.txt) and markdown (.md) uploads are supported",
            {"filename": filename, "content_type": content_type},
        )


class EmbeddingError(AssistantException):
    """The provider returned no usable embedding."""


class DimensionMismatchError(AssistantException):
    """Two vectors of different length were compared."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            {"expected": expected, "actual": actual},
        )


class GenerationError(AssistantException):
    """The generative model call failed or no API key is configured."""


class TranscriptionError(AssistantException):
    """Audio could not be decoded or understood."""


class LiveSessionError(AssistantException):
    """Lifecycle misuse of a live session, such as opening it twice."""

    def __init__(self, message: str, state: str | None = None) -> None:
        super().__init__(message, {"state": state} if state else None)
