"""
FastAPI application entry point for the API gateway.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from goal_service.error_handlers import register_exception_handlers
from goal_service.middleware import LoggingMiddleware
from goal_service.utils.error_tracking import init_error_tracking
from goal_service.utils.logging_config import configure_logging
from goal_service.utils.timestamps import current_timestamp_ms

from .config import Settings, get_settings
from .proxy import GATEWAY_PREFIX, UpstreamProxy

logger = logging.getLogger(__name__)

SERVICE_NAME = "API Gateway"

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def get_proxy(request: Request) -> UpstreamProxy:
    """Get the upstream proxy owned by the running application."""
    return request.app.state.proxy


ProxyDep = Annotated[UpstreamProxy, Depends(get_proxy)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    configure_logging(
        application="api-gateway",
        environment=settings.ENVIRONMENT,
        log_level=settings.LOG_LEVEL,
    )
    logger.info(
        f"Starting {settings.APP_NAME} v{settings.APP_VERSION}",
        extra={"upstream_url": settings.UPSTREAM_URL},
    )

    init_error_tracking(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=settings.APP_VERSION,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

    yield

    logger.info("Shutting down application...")
    await app.state.proxy.aclose()
    logger.info("Shutdown complete")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure the gateway application.

    Args:
        settings: Gateway settings; defaults to the cached environment settings
        transport: Optional httpx transport for upstream calls (used by tests)
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.proxy = UpstreamProxy(
        settings.UPSTREAM_URL,
        timeout=settings.UPSTREAM_TIMEOUT,
        transport=transport,
    )

    register_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": f"API Gateway running on port {settings.PORT}"}

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Gateway health check; the upstream health URL is advertised, not called."""
        return {
            "status": "OK",
            "service": SERVICE_NAME,
            "microservices": {
                "healthGoal": settings.upstream_health_url,
            },
            "timestamp": current_timestamp_ms(),
        }

    @app.api_route(GATEWAY_PREFIX, methods=PROXY_METHODS, include_in_schema=False)
    @app.api_route(
        GATEWAY_PREFIX + "/{path:path}", methods=PROXY_METHODS, include_in_schema=False
    )
    async def forward_goals(request: Request, proxy: ProxyDep) -> Response:
        """Forward goal requests to the goal service."""
        return await proxy.forward(request)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
