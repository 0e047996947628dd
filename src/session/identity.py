"""Identity handed to the client by the authentication provider."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthIdentity:
    """The signed-in user as the auth provider reports it."""

    uid: str
    email: str = ""
    display_name: Optional[str] = None
