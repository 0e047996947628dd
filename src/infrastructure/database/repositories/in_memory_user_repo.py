"""In-memory User repository for tests and local runs."""

from dataclasses import replace
from typing import Any, Mapping

from domain.entities.user import UserRecord


class InMemoryUserRepository:
    """In-memory implementation of User repository.

    Stores records keyed by identity key and hands out copies, so callers
    never hold a reference into the store.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    async def get(self, identity_key: str) -> UserRecord | None:
        user = self._users.get(identity_key)
        return replace(user) if user else None

    async def upsert(
        self,
        identity_key: str,
        email: str,
        fields: Mapping[str, Any],
    ) -> UserRecord:
        user = self._users.get(identity_key)
        if user is None:
            user = UserRecord(identity_key=identity_key, email=email)
            self._users[identity_key] = user
        user.apply(dict(fields))
        return replace(user)

    async def update(
        self, identity_key: str, fields: Mapping[str, Any]
    ) -> UserRecord | None:
        user = self._users.get(identity_key)
        if user is None:
            return None
        user.apply(dict(fields))
        return replace(user)

    async def ping(self) -> bool:
        return True

    def clear(self) -> None:
        """Remove all records."""
        self._users.clear()

    def count(self) -> int:
        return len(self._users)
