"""User profile service layer with business logic."""

from typing import Any, Mapping, Optional

import structlog

from core.exceptions import UserNotFoundError, ValidationError
from domain.entities.user import PROFILE_COMPLETION_FIELDS, UPDATABLE_FIELDS, UserRecord
from domain.repositories.user_repository import IUserRepository

logger = structlog.get_logger()

COMPLETE_PROFILE_MESSAGE = (
    "All fields are required: name, headline, bio, and profile picture"
)


class UserService:
    """Service layer for UserRecord business logic.

    The service is the only path to the user store. Writes go through the
    store's single-document atomic operations; concurrent writes to the
    same identity key are last-writer-wins.
    """

    def __init__(self, repository: IUserRepository) -> None:
        self._repository = repository

    async def get_profile(self, identity_key: str) -> UserRecord:
        """Get a user record. Never creates one."""
        user = await self._repository.get(identity_key)
        if not user:
            raise UserNotFoundError(identity_key)
        return user

    async def upsert_profile(
        self,
        identity_key: str,
        email: str,
        name: Optional[str] = None,
        headline: Optional[str] = None,
        bio: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> UserRecord:
        """Create the record if absent, otherwise merge the given fields.

        ``None`` means "not provided"; an empty string is a value.
        """
        fields = {
            key: value
            for key, value in (
                ("name", name),
                ("headline", headline),
                ("bio", bio),
                ("profile_picture", profile_picture),
            )
            if value is not None
        }

        user = await self._repository.upsert(identity_key, email, fields)
        logger.info(
            "profile_upserted",
            identity_key=identity_key,
            fields=sorted(fields),
        )
        return user

    async def complete_profile(
        self,
        identity_key: str,
        name: str,
        headline: str,
        bio: str,
        profile_picture: str,
    ) -> UserRecord:
        """Fill in every onboarding field at once (replace, not merge)."""
        values = {
            "name": name,
            "headline": headline,
            "bio": bio,
            "profile_picture": profile_picture,
        }
        missing = [field for field in PROFILE_COMPLETION_FIELDS if not values[field]]
        if missing:
            raise ValidationError(COMPLETE_PROFILE_MESSAGE, details={"missing": missing})

        user = await self._repository.update(identity_key, values)
        if not user:
            raise UserNotFoundError(identity_key)

        logger.info("profile_completed", identity_key=identity_key)
        return user

    async def update_profile(
        self, identity_key: str, changes: Mapping[str, Any]
    ) -> UserRecord:
        """Merge a partial set of updatable fields into an existing record."""
        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown profile fields: {', '.join(unknown)}",
                details={"unknown": unknown},
            )
        nulls = sorted(key for key, value in changes.items() if value is None)
        if nulls:
            raise ValidationError(
                f"Profile fields cannot be null: {', '.join(nulls)}",
                details={"null": nulls},
            )

        if not changes:
            return await self.get_profile(identity_key)

        user = await self._repository.update(identity_key, dict(changes))
        if not user:
            raise UserNotFoundError(identity_key)

        logger.info(
            "profile_updated",
            identity_key=identity_key,
            fields=sorted(changes),
        )
        return user
