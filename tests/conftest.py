from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gateway.config import Settings as GatewaySettings
from gateway.main import create_app as create_gateway_app
from goal_service.config import Settings
from goal_service.main import create_app

UPSTREAM_URL = "http://goal-service:3000"


@pytest.fixture
def settings() -> Settings:
    """Goal service settings that ignore any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Fresh goal service app; each test gets its own empty store."""
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Async client talking to the goal service in-process.

    Lifespan is not triggered, so logging and Sentry stay untouched.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    return GatewaySettings(_env_file=None, UPSTREAM_URL=UPSTREAM_URL)


@pytest.fixture
async def gateway_app(
    gateway_settings: GatewaySettings, app: FastAPI
) -> AsyncGenerator[FastAPI, None]:
    """Gateway whose upstream calls are served by the in-process goal service."""
    gateway = create_gateway_app(gateway_settings, transport=ASGITransport(app=app))
    yield gateway
    await gateway.state.proxy.aclose()


@pytest.fixture
async def gateway_client(gateway_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=gateway_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://gateway") as ac:
        yield ac
