"""User repository protocol."""

from typing import Any, Mapping, Protocol

from domain.entities.user import UserRecord


class IUserRepository(Protocol):
    """Repository interface for UserRecord entities."""

    async def get(self, identity_key: str) -> UserRecord | None:
        """Get a user record by identity key."""
        ...

    async def upsert(
        self,
        identity_key: str,
        email: str,
        fields: Mapping[str, Any],
    ) -> UserRecord:
        """Merge fields into the record, creating it with defaults if absent.

        Email is only written when the record is created.
        """
        ...

    async def update(
        self, identity_key: str, fields: Mapping[str, Any]
    ) -> UserRecord | None:
        """Set fields on an existing record. Returns None if it does not exist."""
        ...

    async def ping(self) -> bool:
        """Check the store is reachable."""
        ...
