"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: samastha_ai.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from samastha_ai.api.deps.dependencies import get_service_cache, get_settings_dependency
from samastha_ai.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class DatabaseHealthResponse(HealthResponse):
    """Knowledge store health with corpus counters."""

    documents: int
    chunks: int
    provider_configured: bool


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message=f"Server Healthy ({settings.environment})")


@router.get("/db", response_model=DatabaseHealthResponse)
async def health_check_db() -> DatabaseHealthResponse:
    """Knowledge store health check."""
    cache = get_service_cache()
    return DatabaseHealthResponse(
        status="healthy",
        message="Knowledge store OK",
        documents=len(cache.store.list_documents()),
        chunks=len(cache.store.chunk_snapshot()),
        provider_configured=cache.gemini.is_configured,
    )
