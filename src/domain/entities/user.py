"""User record domain entity."""

from dataclasses import asdict, dataclass
from typing import Any

# Fields a client may change after creation. The identity key is immutable.
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"email", "name", "headline", "bio", "profile_picture"}
)

# Fields filled in by profile completion, in message order.
PROFILE_COMPLETION_FIELDS: tuple[str, ...] = ("name", "headline", "bio", "profile_picture")


@dataclass
class UserRecord:
    """Domain entity for one identity's profile."""

    identity_key: str
    email: str = ""
    name: str = ""
    headline: str = ""
    bio: str = ""
    profile_picture: str = ""

    def apply(self, changes: dict[str, Any]) -> None:
        """Merge present fields into the record."""
        for key, value in changes.items():
            setattr(self, key, value)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
