"""
ASGI entry point.

Builds the FastAPI app: REST routes under /api/v1, the live voice websocket
at the root, correlation and access-log middleware, and a lifespan that
opens the knowledge store and seeds it on first boot.

Dependencies: fastapi, uvicorn, samastha_ai.api, samastha_ai.observability, samastha_ai.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from samastha_ai.api import api_router
from samastha_ai.api.deps.dependencies import ServiceCache, get_document_service, get_service_cache
from samastha_ai.api.routers import live_router
from samastha_ai.configs import get_settings
from samastha_ai.observability.logger import configure_logging
from samastha_ai.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


async def _warm_up(cache: ServiceCache) -> None:
    """Touch every shared collaborator so configuration errors surface at boot."""
    documents = cache.store.list_documents()
    logger.info(f"{__name__}:_warm_up - Knowledge store open", extra={"document_count": len(documents)})

    if not cache.gemini.is_configured:
        logger.warning(f"{__name__}:_warm_up - No Gemini API key; model calls will fail until one is set")
    _ = cache.retriever, cache.generator

    if cache.settings.seed_demo_data:
        seeded = await get_document_service().seed_if_empty()
        logger.info(f"{__name__}:_warm_up - Seed check done", extra={"seeded": seeded})


@asynccontextmanager
async def lifespan(app: FastAPI):
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)

    try:
        await _warm_up(cache)
    except Exception as e:
        logger.exception(f"{__name__}:lifespan - Startup failed", extra={"error_type": type(e).__name__})
        raise
    logger.info(f"{__name__}:lifespan - Ready")

    yield

    cache.clear()
    logger.info(f"{__name__}:lifespan - Stopped")


def create_app() -> FastAPI:
    """
    Assemble the application.

    Middleware registered later wraps earlier registrations, so CORS runs
    outermost and the correlation ID is bound before the access log line.
    """
    app = FastAPI(
        title="Samastha AI API",
        description="Knowledge-grounded assistant with text chat, lead capture and live voice",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=API_PREFIX)
    app.include_router(live_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("samastha_ai.main:app", host="localhost", port=8082, reload=get_settings().debug)
