"""Per-session client state: the signed-in identity and its cached profile."""

from session.identity import AuthIdentity
from session.profile_cache import CacheState, ProfileCache, ProfileView
from session.proxy_client import ProfileFetchError, ProfileProxyClient

__all__ = [
    "AuthIdentity",
    "CacheState",
    "ProfileCache",
    "ProfileFetchError",
    "ProfileProxyClient",
    "ProfileView",
]
