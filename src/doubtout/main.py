"""DoubtOut FastAPI Application Entry Point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from doubtout import __version__
from doubtout.config import settings
from doubtout.db import create_tables, engine
from doubtout.exception_handlers import register_exception_handlers
from doubtout.middleware import configure_logging, register_middleware
from doubtout.routers import (
    answers_router,
    auth_router,
    catalog_router,
    doubts_router,
    points_router,
    practice_router,
)
from doubtout.schemas import HealthResponse


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    configure_logging("DEBUG" if settings.debug else "INFO")
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
    )
    if settings.create_tables_on_startup:
        await create_tables()
    yield
    await engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title="DoubtOut API",
    description="Campus doubt resolution: questions, answers, peer review and points",
    version=__version__,
    lifespan=lifespan,
)

register_middleware(app)

register_exception_handlers(app)

# Register routers
for router in (
    auth_router,
    doubts_router,
    answers_router,
    practice_router,
    points_router,
    catalog_router,
):
    app.include_router(router, prefix="/api")


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Health check endpoint for container orchestration."""
    return HealthResponse(
        status="healthy",
        service="doubtout-api",
        version=__version__,
    )
