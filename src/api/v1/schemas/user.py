"""Pydantic schemas for the users API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.entities.user import UserRecord

_MUTABLE = ("name", "headline", "bio", "profile_picture")


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input, emits camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("must be a string, not null")
    return value


class UserCreate(CamelModel):
    """Body of the create-or-update call."""

    identity_key: str = Field(..., min_length=1)
    email: str
    name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

    @field_validator(*_MUTABLE, mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        return _reject_null(v)


class UserCompleteProfile(CamelModel):
    """Body of the profile completion call.

    The four profile fields are checked by the service so a missing one
    produces the dedicated message rather than a schema error.
    """

    identity_key: str = Field(..., min_length=1)
    name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None


class UserUpdate(CamelModel):
    """Partial update. Only the fields sent are applied."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    email: Optional[str] = None
    name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

    @field_validator("email", *_MUTABLE, mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        return _reject_null(v)

    def changes(self) -> dict[str, Any]:
        """Fields present in the request, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class UserResponse(CamelModel):
    """A full user record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "identityKey": "firebase-uid-123",
                "email": "ada@example.com",
                "name": "Ada Lovelace",
                "headline": "Analyst",
                "bio": "",
                "profilePicture": "",
            }
        },
    )

    identity_key: str
    email: str
    name: str
    headline: str
    bio: str
    profile_picture: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(**user.to_dict())
