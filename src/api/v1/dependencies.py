"""Dependency injection factories for the API."""

from functools import lru_cache

from core.config import settings
from domain.repositories.user_repository import IUserRepository
from domain.services.user_service import UserService
from infrastructure.database.client import MongoDatabase
from infrastructure.database.repository_factory import create_user_repository


@lru_cache
def get_database() -> MongoDatabase:
    """Get the process-wide database handle (connected in the app lifespan)."""
    return MongoDatabase.from_settings(settings)


@lru_cache
def get_user_repository() -> IUserRepository:
    """Get the configured user repository."""
    database = get_database() if settings.user_repository == "mongodb" else None
    return create_user_repository(settings, database)


@lru_cache
def get_user_service() -> UserService:
    """Get User service instance."""
    return UserService(get_user_repository())
