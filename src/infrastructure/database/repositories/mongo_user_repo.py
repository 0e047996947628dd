"""MongoDB implementation of User repository."""

from typing import Any, Mapping

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.exceptions import PersistenceError
from domain.entities.user import UserRecord

logger = structlog.get_logger()

# Mutable fields and their value for a freshly created record.
_DEFAULTS: dict[str, str] = {
    "name": "",
    "headline": "",
    "bio": "",
    "profile_picture": "",
}


class MongoUserRepository:
    """MongoDB implementation of User repository.

    One document per identity key in the ``users`` collection. The
    identity key carries a unique index, so all writes are single-document
    atomic updates keyed on it.
    """

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db
        self._collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        """Create the unique identity key index."""
        await self._collection.create_index(
            [("identity_key", ASCENDING)],
            unique=True,
            name="identity_key_unique",
        )

    async def get(self, identity_key: str) -> UserRecord | None:
        try:
            doc = await self._collection.find_one({"identity_key": identity_key})
        except PyMongoError as e:
            logger.error("user_read_failed", identity_key=identity_key, error=str(e))
            raise PersistenceError(str(e), write=False) from e

        if not doc:
            return None
        return self.from_document(doc)

    async def upsert(
        self,
        identity_key: str,
        email: str,
        fields: Mapping[str, Any],
    ) -> UserRecord:
        update = self.build_upsert(email, fields)
        try:
            doc = await self._upsert_once(identity_key, update)
        except DuplicateKeyError:
            # Lost an insert race for the same key; the document now exists.
            doc = await self._run_write(
                identity_key, self._upsert_once(identity_key, update)
            )
        except PyMongoError as e:
            logger.error("user_write_failed", identity_key=identity_key, error=str(e))
            raise PersistenceError(str(e)) from e
        return self.from_document(doc)

    async def update(
        self, identity_key: str, fields: Mapping[str, Any]
    ) -> UserRecord | None:
        doc = await self._run_write(
            identity_key,
            self._collection.find_one_and_update(
                {"identity_key": identity_key},
                {"$set": dict(fields)},
                return_document=ReturnDocument.AFTER,
            ),
        )
        if not doc:
            return None
        return self.from_document(doc)

    async def ping(self) -> bool:
        try:
            await self._db.command("ping")
        except PyMongoError:
            return False
        return True

    async def _upsert_once(
        self, identity_key: str, update: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._collection.find_one_and_update(  # type: ignore[no-any-return]
            {"identity_key": identity_key},
            update,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    async def _run_write(self, identity_key: str, operation: Any) -> Any:
        try:
            return await operation
        except PyMongoError as e:
            logger.error("user_write_failed", identity_key=identity_key, error=str(e))
            raise PersistenceError(str(e)) from e

    @staticmethod
    def build_upsert(email: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Build the update document for create-or-merge.

        Present fields go in ``$set``; email and defaults for omitted fields
        only apply when the document is inserted.
        """
        on_insert: dict[str, Any] = {"email": email}
        on_insert.update(
            {key: value for key, value in _DEFAULTS.items() if key not in fields}
        )

        update: dict[str, Any] = {"$setOnInsert": on_insert}
        if fields:
            update["$set"] = dict(fields)
        return update

    @staticmethod
    def from_document(doc: Mapping[str, Any]) -> UserRecord:
        """Convert a MongoDB document to a UserRecord."""
        return UserRecord(
            identity_key=doc["identity_key"],
            email=doc.get("email", ""),
            name=doc.get("name", ""),
            headline=doc.get("headline", ""),
            bio=doc.get("bio", ""),
            profile_picture=doc.get("profile_picture", ""),
        )
