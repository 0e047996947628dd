"""Shared fixtures for unit tests."""

from unittest.mock import AsyncMock

import pytest

from domain.entities.user import UserRecord


@pytest.fixture
def repo() -> AsyncMock:
    """Mocked user repository."""
    return AsyncMock()


@pytest.fixture
def identity_key() -> str:
    return "firebase-uid-123"


@pytest.fixture
def existing_user(identity_key: str) -> UserRecord:
    return UserRecord(
        identity_key=identity_key,
        email="ada@example.com",
        name="Ada Lovelace",
        headline="Analyst",
        bio="Notes on the engine",
        profile_picture="https://cdn.example.com/ada.png",
    )
