"""Health check endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_user_repository
from core.config import settings
from domain.repositories.user_repository import IUserRepository

VERSION = "1.0.0"

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    uptime: float
    database: str | None = None


class RootResponse(BaseModel):
    """Service banner."""

    message: str
    version: str
    endpoints: dict[str, str]


def _uptime() -> float:
    return round(time.monotonic() - _started_at, 3)


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root() -> RootResponse:
    """Name, version and the main endpoints of the API."""
    return RootResponse(
        message=f"{settings.app_name} is running!",
        version=VERSION,
        endpoints={
            "health": "/health",
            "users": "/api/users",
        },
    )


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        uptime=_uptime(),
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    repository: IUserRepository = Depends(get_user_repository),
) -> HealthResponse:
    """Health check including user store connectivity."""
    db_status = "healthy" if await repository.ping() else "unhealthy"
    overall_status = "healthy" if db_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        uptime=_uptime(),
        database=db_status,
    )
