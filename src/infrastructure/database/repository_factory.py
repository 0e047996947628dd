"""User repository selection based on configuration."""

from typing import Optional

from core.config import Settings
from domain.repositories.user_repository import IUserRepository
from infrastructure.database.client import MongoDatabase
from infrastructure.database.repositories.in_memory_user_repo import (
    InMemoryUserRepository,
)
from infrastructure.database.repositories.mongo_user_repo import MongoUserRepository


def create_user_repository(
    settings: Settings, database: Optional[MongoDatabase] = None
) -> IUserRepository:
    """Create the user repository configured by ``USER_REPOSITORY``.

    - "inmemory": InMemoryUserRepository
    - "mongodb": MongoUserRepository on the connected database
    """
    if settings.user_repository == "inmemory":
        return InMemoryUserRepository()

    if database is None:
        raise ValueError("A MongoDatabase is required when USER_REPOSITORY=mongodb")
    return MongoUserRepository(database.db)
