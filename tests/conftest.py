"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Disable rate limiting and use the in-memory store in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["USER_REPOSITORY"] = "inmemory"

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.user_service import UserService
from infrastructure.database.repositories.in_memory_user_repo import (
    InMemoryUserRepository,
)


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh in-memory user store for each test."""
    return InMemoryUserRepository()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the default app."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def backend_app(repository: InMemoryUserRepository) -> FastAPI:
    """Backend app wired to the per-test in-memory store."""
    from api.v1.dependencies import get_user_repository, get_user_service
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: repository
    app.dependency_overrides[get_user_service] = lambda: UserService(repository)
    return app


@pytest.fixture
async def api_client(backend_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Test client for the backend API."""
    transport = ASGITransport(app=backend_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def make_proxy_app(upstream: httpx.AsyncClient) -> FastAPI:
    """Proxy app whose outbound client is ``upstream``."""
    from proxy.app import create_proxy_app
    from proxy.dependencies import get_http_client

    app = create_proxy_app()
    app.dependency_overrides[get_http_client] = lambda: upstream
    return app


@pytest.fixture
async def proxy_client(backend_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Test client for the proxy, forwarding to the in-process backend."""
    async with AsyncClient(
        transport=ASGITransport(app=backend_app),
        base_url="http://backend/api",
    ) as upstream:
        app = make_proxy_app(upstream)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://proxy") as c:
            yield c
