"""Integration tests for the profile proxy."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from proxy.app import create_proxy_app
from proxy.dependencies import get_http_client


async def _seed(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/users", json={"identityKey": "u1", "email": "a@b.com", "name": "Ada"}
    )
    assert response.status_code == 201


async def _proxy_with_upstream(handler) -> tuple[AsyncClient, AsyncClient]:
    upstream = AsyncClient(transport=httpx.MockTransport(handler), base_url="http://backend/api")
    app = create_proxy_app()
    app.dependency_overrides[get_http_client] = lambda: upstream
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://proxy")
    return upstream, client


class TestProxyAgainstBackend:
    @pytest.mark.asyncio
    async def test_get_relays_record(self, proxy_client: AsyncClient, api_client: AsyncClient):
        await _seed(api_client)

        response = await proxy_client.get("/api/users/u1")

        assert response.status_code == 200
        assert response.json() == (await api_client.get("/api/users/u1")).json()

    @pytest.mark.asyncio
    async def test_get_unknown_is_404_with_fixed_body(self, proxy_client: AsyncClient):
        response = await proxy_client.get("/api/users/nobody")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_put_relays_updated_record(
        self, proxy_client: AsyncClient, api_client: AsyncClient
    ):
        await _seed(api_client)

        response = await proxy_client.put("/api/users/u1", json={"bio": "hello"})

        assert response.status_code == 200
        body = response.json()
        assert body["bio"] == "hello"
        assert body["name"] == "Ada"

    @pytest.mark.asyncio
    async def test_put_relays_upstream_error_verbatim(
        self, proxy_client: AsyncClient, api_client: AsyncClient
    ):
        direct = await api_client.put("/api/users/nobody", json={"bio": "hello"})

        response = await proxy_client.put("/api/users/nobody", json={"bio": "hello"})

        assert response.status_code == direct.status_code == 404
        assert response.json() == direct.json()


class TestProxyFailures:
    @pytest.mark.asyncio
    async def test_get_transport_failure_is_500(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        upstream, client = await _proxy_with_upstream(handler)
        async with upstream, client:
            response = await client.get("/api/users/u1")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    @pytest.mark.asyncio
    async def test_put_timeout_is_500(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        upstream, client = await _proxy_with_upstream(handler)
        async with upstream, client:
            response = await client.put("/api/users/u1", json={"bio": "x"})

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    @pytest.mark.asyncio
    async def test_get_upstream_error_status_is_kept(self):
        upstream, client = await _proxy_with_upstream(
            lambda request: httpx.Response(500, json={"message": "boom"})
        )
        async with upstream, client:
            response = await client.get("/api/users/u1")

        assert response.status_code == 500
        assert response.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_forwards_body_and_path_unchanged(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.content
            seen["request_id"] = request.headers.get("x-request-id")
            return httpx.Response(200, json={"identityKey": "u 1"})

        upstream, client = await _proxy_with_upstream(handler)
        async with upstream, client:
            response = await client.put(
                "/api/users/u%201",
                content=b'{"bio": "hi"}',
                headers={"X-Request-ID": "req-1"},
            )

        assert response.status_code == 200
        assert seen == {
            "method": "PUT",
            "path": "/api/users/u 1",
            "body": b'{"bio": "hi"}',
            "request_id": "req-1",
        }
