"""
FastAPI application with assembled routers.

Initializes the FastAPI app, warms the service cache on startup and
configures the uvicorn server.

Dependencies: fastapi, uvicorn, finmind.api.routers, finmind.api.deps
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finmind import __version__
from finmind.api.deps.dependencies import get_service_cache
from finmind.boundary.db import create_tables
from finmind.boundary.vdb import PineconeVectorIndex
from finmind.core.exceptions import DimensionMismatchError
from finmind.observability import configure_logging

from .routers import chat_router, health_router, knowledge_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: logging, service cache warm-up, table creation, index dimension
    check. Shutdown: close Redis and the database engine.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)

    logger.info(f"{__name__}:lifespan - Pre-warming service cache...")
    _ = cache.chat_service
    _ = cache.knowledge_service

    if cache.settings.database.auto_create_tables:
        await create_tables(cache.engine)
        logger.info(f"{__name__}:lifespan - Database tables ready")

    if isinstance(cache.vector_index, PineconeVectorIndex):
        try:
            await cache.vector_index.verify_dimension()
        except DimensionMismatchError:
            raise
        except Exception as e:
            logger.warning(f"{__name__}:lifespan - Could not verify index dimension: {type(e).__name__}: {e}")
    logger.info(f"{__name__}:lifespan - Service cache pre-warmed")

    yield

    await cache.aclose()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="ZUEL-FinMind API",
        description="Retrieval-augmented finance assistant with conversational memory",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(knowledge_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "finmind.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
