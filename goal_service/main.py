"""
FastAPI application entry point for the Health Goal Service.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from .config import Settings, get_settings
from .error_handlers import register_exception_handlers
from .middleware import LoggingMiddleware
from .routes.goals import router as goals_router
from .services.goal_store import GoalStore
from .utils.error_tracking import init_error_tracking
from .utils.logging_config import configure_logging
from .utils.timestamps import current_timestamp_ms

logger = logging.getLogger(__name__)

SERVICE_NAME = "Health Goal Service"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Logging first, before anything else logs
    configure_logging(
        application="goal-service",
        environment=settings.ENVIRONMENT,
        log_level=settings.LOG_LEVEL,
    )
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    init_error_tracking(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=settings.APP_VERSION,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

    yield

    logger.info(
        "Shutting down application...",
        extra={"goal_count": len(app.state.goal_store)},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every call builds a fresh, empty goal store.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.goal_store = GoalStore()

    register_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Liveness check."""
        return {
            "status": "OK",
            "service": SERVICE_NAME,
            "timestamp": current_timestamp_ms(),
        }

    app.include_router(goals_router)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
