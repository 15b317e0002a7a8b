"""Service orchestrators."""

from .chat_service import ChatService, TurnResult
from .conversation_registry import ConversationRegistry
from .document_service import DocumentService

__all__ = [
    "ChatService",
    "ConversationRegistry",
    "DocumentService",
    "TurnResult",
]
