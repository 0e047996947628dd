"""MongoDB connection lifecycle."""

from typing import Any, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import Settings

logger = structlog.get_logger()


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "mongodb_connect_retry",
        attempt=retry_state.attempt_number,
        next_wait_s=round(wait, 2),
        error=str(exc),
    )


class MongoDatabase:
    """Process-scoped MongoDB handle with explicit connect/close.

    ``connect()`` is called once at startup and retries the initial ping
    with bounded exponential backoff. After that the driver's connection
    pool handles reconnection on its own.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        connect_attempts: int = 5,
        max_backoff: float = 30.0,
        client: Optional[AsyncIOMotorClient] = None,
    ) -> None:
        self._uri = uri
        self._database_name = database_name
        self._connect_attempts = connect_attempts
        self._max_backoff = max_backoff
        self._client = client
        self._connected = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDatabase":
        return cls(
            uri=settings.mongodb_uri,
            database_name=settings.mongodb_database,
            connect_attempts=settings.db_connect_attempts,
            max_backoff=settings.db_connect_max_backoff,
        )

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the database handle."""
        if self._client is None:
            raise RuntimeError("MongoDatabase not connected. Call connect() first.")
        return self._client[self._database_name]

    async def connect(self) -> None:
        """Open the client and wait until the server answers a ping."""
        if self._client is None:
            self._client = AsyncIOMotorClient(self._uri, serverSelectionTimeoutMS=5000)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._connect_attempts),
            wait=wait_exponential(multiplier=1, min=0, max=self._max_backoff),
            retry=retry_if_exception_type(PyMongoError),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                await self._client.admin.command("ping")

        self._connected = True
        logger.info("mongodb_connected", database=self._database_name)

    async def ping(self) -> bool:
        """Check connectivity without retrying."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            logger.warning("mongodb_ping_failed", exc_info=True)
            return False
        return True

    def close(self) -> None:
        """Close the client. Safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("mongodb_connection_closed")
        self._connected = False
