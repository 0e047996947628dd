"""HTTP client for the backend users API."""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from core.exceptions import TransportError

logger = structlog.get_logger()


class UserServiceClient:
    """Thin wrapper over ``httpx.AsyncClient`` for the users endpoints.

    Returns upstream responses as-is. Any failure to complete the call
    (connection, timeout, protocol) becomes a ``TransportError``.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def get_user(
        self, identity_key: str, request_id: Optional[str] = None
    ) -> httpx.Response:
        return await self._send("GET", identity_key, request_id)

    async def update_user(
        self, identity_key: str, body: bytes, request_id: Optional[str] = None
    ) -> httpx.Response:
        return await self._send("PUT", identity_key, request_id, content=body)

    async def _send(
        self,
        method: str,
        identity_key: str,
        request_id: Optional[str],
        **kwargs: Any,
    ) -> httpx.Response:
        url = f"/users/{quote(identity_key, safe='')}"
        headers = {"Content-Type": "application/json"}
        if request_id:
            headers["X-Request-ID"] = request_id
        try:
            return await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "upstream_request_failed",
                method=method,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError() from e
