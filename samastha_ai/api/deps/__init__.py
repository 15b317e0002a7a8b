"""FastAPI dependencies."""

from samastha_ai.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_document_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_document_service",
    "get_service_cache",
    "get_settings_dependency",
]
