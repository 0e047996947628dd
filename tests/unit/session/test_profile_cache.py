"""Unit tests for the client-side profile cache."""

from unittest.mock import AsyncMock

import httpx
import pytest

from session import AuthIdentity, CacheState, ProfileCache, ProfileFetchError, ProfileProxyClient
from session.profile_cache import initials_for

ADA = AuthIdentity(uid="u1", email="ada@example.com", display_name="Ada Lovelace")
GRACE = AuthIdentity(uid="u2", email="grace@example.com", display_name="Grace Hopper")

PROFILE = {
    "identityKey": "u1",
    "email": "ada@example.com",
    "name": "Ada King",
    "headline": "Analyst",
    "bio": "",
    "profilePicture": "https://cdn.example.com/ada.png",
}


@pytest.fixture
def fetcher() -> AsyncMock:
    mock = AsyncMock()
    mock.fetch.return_value = PROFILE
    return mock


@pytest.fixture
def cache(fetcher: AsyncMock) -> ProfileCache:
    return ProfileCache(fetcher)


class TestAuthTransitions:
    @pytest.mark.asyncio
    async def test_starts_empty(self, cache: ProfileCache):
        assert cache.state is CacheState.EMPTY
        assert cache.current_profile() is None

    @pytest.mark.asyncio
    async def test_supplied_profile_skips_network(self, cache: ProfileCache, fetcher: AsyncMock):
        await cache.on_auth_changed(ADA, profile=PROFILE)

        assert cache.state is CacheState.POPULATED
        assert cache.profile == PROFILE
        fetcher.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_in_fetches_once(self, cache: ProfileCache, fetcher: AsyncMock):
        await cache.on_auth_changed(ADA)
        await cache.on_auth_changed(ADA)

        assert cache.state is CacheState.POPULATED
        fetcher.fetch.assert_called_once_with("u1")

    @pytest.mark.asyncio
    async def test_logout_resets(self, cache: ProfileCache):
        await cache.on_auth_changed(ADA, profile=PROFILE)

        await cache.on_auth_changed(None)

        assert cache.state is CacheState.EMPTY
        assert cache.identity is None

    @pytest.mark.asyncio
    async def test_identity_change_resets_and_refetches(
        self, cache: ProfileCache, fetcher: AsyncMock
    ):
        await cache.on_auth_changed(ADA, profile=PROFILE)
        grace_profile = {**PROFILE, "identityKey": "u2", "name": "Grace Hopper"}
        fetcher.fetch.return_value = grace_profile

        await cache.on_auth_changed(GRACE)

        assert cache.profile == grace_profile
        fetcher.fetch.assert_called_once_with("u2")


class TestFailedFetch:
    @pytest.mark.asyncio
    async def test_failure_stays_empty_without_retry(
        self, cache: ProfileCache, fetcher: AsyncMock
    ):
        fetcher.fetch.side_effect = ProfileFetchError("not found", status_code=404)

        await cache.on_auth_changed(ADA)

        assert cache.state is CacheState.EMPTY
        assert fetcher.fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_load_without_identity_does_nothing(
        self, cache: ProfileCache, fetcher: AsyncMock
    ):
        assert await cache.load() is False
        fetcher.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_response_for_previous_identity_is_dropped(self, fetcher: AsyncMock):
        cache = ProfileCache(fetcher)

        async def sign_out_mid_flight(uid: str) -> dict:
            await cache.on_auth_changed(None)
            return PROFILE

        fetcher.fetch.side_effect = sign_out_mid_flight

        await cache.on_auth_changed(ADA)

        assert cache.state is CacheState.EMPTY


class TestCurrentProfile:
    @pytest.mark.asyncio
    async def test_fallback_uses_display_name_initials(
        self, cache: ProfileCache, fetcher: AsyncMock
    ):
        fetcher.fetch.side_effect = ProfileFetchError("down")
        await cache.on_auth_changed(ADA)

        view = cache.current_profile()

        assert view is not None
        assert view.name == "Ada Lovelace"
        assert view.initials == "AL"
        assert view.profile_picture == ""

    @pytest.mark.asyncio
    async def test_fallback_uses_email_without_display_name(
        self, cache: ProfileCache, fetcher: AsyncMock
    ):
        fetcher.fetch.side_effect = ProfileFetchError("down")
        await cache.on_auth_changed(AuthIdentity(uid="u3", email="zed@example.com"))

        view = cache.current_profile()

        assert view is not None
        assert view.name == "zed@example.com"
        assert view.initials == "Z"

    @pytest.mark.asyncio
    async def test_populated_view(self, cache: ProfileCache):
        await cache.on_auth_changed(ADA, profile=PROFILE)

        view = cache.current_profile()

        assert view is not None
        assert view.name == "Ada King"
        assert view.headline == "Analyst"
        assert view.profile_picture == PROFILE["profilePicture"]
        assert view.initials == "AK"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Ada Lovelace", "AL"),
            ("ada byron lovelace", "AB"),
            ("  ", "U"),
            (None, "U"),
        ],
    )
    def test_initials(self, name, expected):
        assert initials_for(name) == expected


class TestCachedCopies:
    @pytest.mark.asyncio
    async def test_supplied_profile_is_copied(self, cache: ProfileCache):
        supplied = dict(PROFILE)
        await cache.on_auth_changed(ADA, profile=supplied)

        supplied["name"] = "Someone Else"

        assert cache.profile["name"] == "Ada King"

    @pytest.mark.asyncio
    async def test_fetched_profile_is_copied(self, cache: ProfileCache, fetcher: AsyncMock):
        fetched = dict(PROFILE)
        fetcher.fetch.return_value = fetched
        await cache.on_auth_changed(ADA)

        fetched["headline"] = "changed"

        assert cache.current_profile().headline == "Analyst"

    @pytest.mark.asyncio
    async def test_profile_property_returns_copy(self, cache: ProfileCache):
        await cache.on_auth_changed(ADA, profile=PROFILE)

        cache.profile["name"] = "changed"

        assert cache.profile == PROFILE


class TestProfileProxyClient:
    @pytest.mark.asyncio
    async def test_fetch_returns_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/users/u1"
            return httpx.Response(200, json=PROFILE)

        transport = httpx.MockTransport(handler)
        async with ProfileProxyClient(base_url="http://proxy", transport=transport) as client:
            assert await client.fetch("u1") == PROFILE

    @pytest.mark.asyncio
    async def test_non_success_raises(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(404, json={"message": "User not found"})
        )
        async with ProfileProxyClient(base_url="http://proxy", transport=transport) as client:
            with pytest.raises(ProfileFetchError) as exc_info:
                await client.fetch("u1")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = httpx.MockTransport(handler)
        async with ProfileProxyClient(base_url="http://proxy", transport=transport) as client:
            with pytest.raises(ProfileFetchError):
                await client.fetch("u1")

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=PROFILE))
        async with ProfileProxyClient(base_url="http://proxy", transport=transport) as client:
            await client.fetch("u1")

        assert client._http.is_closed

    @pytest.mark.asyncio
    async def test_cache_stays_empty_when_proxy_returns_404(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(404, json={"message": "User not found"})
        )
        async with ProfileProxyClient(base_url="http://proxy", transport=transport) as client:
            cache = ProfileCache(client)

            await cache.on_auth_changed(ADA)

            assert cache.state is CacheState.EMPTY
