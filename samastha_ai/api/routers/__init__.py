"""API routers."""

from .admin import router as admin_router
from .conversations import router as conversations_router
from .documents import router as documents_router
from .health import router as health_router
from .live import router as live_router

__all__ = [
    "admin_router",
    "conversations_router",
    "documents_router",
    "health_router",
    "live_router",
]
