"""Client-side access to the profile proxy."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import settings


class ProfileFetchError(Exception):
    """The proxy did not return a profile."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProfileProxyClient:
    """Fetches profiles through the proxy's ``/api/users/{id}`` route."""

    def __init__(
        self,
        base_url: str = settings.proxy_url,
        timeout: float = settings.proxy_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def fetch(self, uid: str) -> dict[str, Any]:
        """Return the profile JSON for ``uid``.

        Raises:
            ProfileFetchError: non-2xx response, undecodable body or
                transport failure.
        """
        try:
            response = await self._http.get(f"/api/users/{quote(uid, safe='')}")
        except httpx.HTTPError as e:
            raise ProfileFetchError(f"Profile request failed: {e}") from e

        if not response.is_success:
            raise ProfileFetchError(
                f"Profile request returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise ProfileFetchError("Profile response was not JSON") from e
        return data

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ProfileProxyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
