"""
API routes module.

FastAPI routers for all HTTP endpoints. The live WebSocket router is mounted
separately, outside the versioned prefix.
"""

from fastapi import APIRouter

from .routers import (
    admin_router,
    conversations_router,
    documents_router,
    health_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(conversations_router)
api_router.include_router(documents_router)
api_router.include_router(admin_router)

__all__ = ["api_router"]
