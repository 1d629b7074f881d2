"""FastAPI application factory."""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import jobs_router, scheduler_router
from ..container import setup_container
from ..scheduler.timers import APSchedulerTimer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    container = setup_container()
    registry = container.registry
    if container.settings.scheduler.enabled:
        registry.start()
    else:
        logger.info("Scheduler disabled, registry not started")
    yield
    # Shutdown
    registry.stop()
    timer = container.timer
    if isinstance(timer, APSchedulerTimer):
        timer.shutdown()


def create_app(
    title: str = "Periodic Job Runner API",
    version: str = "1.0.0",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        title: API title
        version: API version
        cors_origins: Allowed CORS origins

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title=title,
        version=version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Include routers
    app.include_router(jobs_router)
    app.include_router(scheduler_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "version": version}

    return app


# Create default app instance
app = create_app()
