"""Proxy routes for user profiles.

These only forward. Upstream failures are relayed, proxy-level failures
become a fixed 500 body.
"""

from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from core.exceptions import TransportError
from proxy.client import UserServiceClient
from proxy.dependencies import get_user_service_client

router = APIRouter(prefix="/users", tags=["users"])


def _decode(upstream: httpx.Response) -> Any:
    try:
        return upstream.json()
    except ValueError as e:
        raise TransportError() from e


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@router.get("/{identity_key}", summary="Get a user profile via the backend")
async def get_user(
    request: Request,
    identity_key: str,
    client: UserServiceClient = Depends(get_user_service_client),
) -> Response:
    """Forward to the backend; any upstream error reads as "User not found"."""
    upstream = await client.get_user(identity_key, _request_id(request))
    if not upstream.is_success:
        return JSONResponse(
            status_code=upstream.status_code,
            content={"message": "User not found"},
        )
    return JSONResponse(content=_decode(upstream))


@router.put("/{identity_key}", summary="Update a user profile via the backend")
async def update_user(
    request: Request,
    identity_key: str,
    client: UserServiceClient = Depends(get_user_service_client),
) -> Response:
    """Forward the body unchanged; upstream errors are relayed verbatim."""
    body = await request.body()
    upstream = await client.update_user(identity_key, body, _request_id(request))
    if not upstream.is_success:
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            media_type=upstream.headers.get("content-type", "application/json"),
        )
    return JSONResponse(content=_decode(upstream))
