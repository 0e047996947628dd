"""Dependency injection factories for the proxy."""

from functools import lru_cache

import httpx
from fastapi import Depends

from core.config import settings
from proxy.client import UserServiceClient


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    """Get the shared outbound client (closed in the proxy lifespan)."""
    return httpx.AsyncClient(
        base_url=settings.user_service_url,
        timeout=settings.proxy_timeout,
    )


def get_user_service_client(
    http: httpx.AsyncClient = Depends(get_http_client),
) -> UserServiceClient:
    """Get a client for the backend users API."""
    return UserServiceClient(http)


async def close_http_client() -> None:
    """Close the shared client if one was created."""
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()
        get_http_client.cache_clear()
