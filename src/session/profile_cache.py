"""In-memory profile cache for one signed-in session."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional, Protocol

import structlog

from session.identity import AuthIdentity
from session.proxy_client import ProfileFetchError

logger = structlog.get_logger()


class CacheState(StrEnum):
    EMPTY = "empty"
    POPULATED = "populated"


class ProfileFetcher(Protocol):
    async def fetch(self, uid: str) -> dict[str, Any]:
        """Return the profile JSON for ``uid`` or raise ProfileFetchError."""
        ...


@dataclass(frozen=True)
class ProfileView:
    """What header and feed components render for the signed-in user."""

    name: str
    email: str
    headline: str
    profile_picture: str
    initials: str


def initials_for(name: Optional[str]) -> str:
    """Up to two upper-case initials, "U" when there is nothing to use."""
    letters = "".join(part[0] for part in (name or "").split())
    return letters.upper()[:2] or "U"


class ProfileCache:
    """Holds the signed-in user's profile, read-only.

    EMPTY until a profile arrives from the auth callback or one GET
    through the proxy, then POPULATED until logout or a change of
    identity. Failed fetches leave it EMPTY and are not retried.
    Concurrent ``load()`` calls are not deduplicated.
    """

    def __init__(self, fetcher: ProfileFetcher) -> None:
        self._fetcher = fetcher
        self._identity: Optional[AuthIdentity] = None
        self._profile: Optional[dict[str, Any]] = None

    @property
    def state(self) -> CacheState:
        return CacheState.POPULATED if self._profile is not None else CacheState.EMPTY

    @property
    def identity(self) -> Optional[AuthIdentity]:
        return self._identity

    @property
    def profile(self) -> Optional[dict[str, Any]]:
        return dict(self._profile) if self._profile is not None else None

    async def on_auth_changed(
        self,
        identity: Optional[AuthIdentity],
        profile: Optional[dict[str, Any]] = None,
    ) -> None:
        """Follow the auth provider: sign-in, profile delivery or logout."""
        if identity is None:
            self.reset()
            self._identity = None
            return

        if self._identity is None or self._identity.uid != identity.uid:
            self.reset()
        self._identity = identity

        if profile is not None:
            self._profile = dict(profile)
            return

        await self.load()

    async def load(self) -> bool:
        """Fetch the profile if EMPTY with an identity. Returns True when POPULATED."""
        if self._profile is not None:
            return True
        if self._identity is None:
            return False

        uid = self._identity.uid
        try:
            data = await self._fetcher.fetch(uid)
        except ProfileFetchError as e:
            logger.warning(
                "profile_fetch_failed",
                uid=uid,
                status_code=e.status_code,
                error=str(e),
            )
            return False

        # Signed out or switched user while the request was in flight.
        if self._identity is None or self._identity.uid != uid:
            return False

        self._profile = dict(data)
        return True

    def reset(self) -> None:
        """Drop the cached profile."""
        self._profile = None

    def current_profile(self) -> Optional[ProfileView]:
        """The cached profile, or a fallback built from the identity."""
        if self._identity is None:
            return None

        fallback_name = self._identity.display_name or self._identity.email
        if self._profile is None:
            return ProfileView(
                name=fallback_name,
                email=self._identity.email,
                headline="",
                profile_picture="",
                initials=initials_for(fallback_name),
            )

        name = self._profile.get("name") or fallback_name
        return ProfileView(
            name=name,
            email=self._profile.get("email") or self._identity.email,
            headline=self._profile.get("headline") or "",
            profile_picture=self._profile.get("profilePicture") or "",
            initials=initials_for(name),
        )
