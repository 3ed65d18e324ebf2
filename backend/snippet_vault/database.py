"""
Snippet Vault Backend - MongoDB Connection Management
======================================================

What:  The process-wide MongoDB connection and its readiness gate.
How:   `MongoConnection` wraps a Motor client. `connect()` opens the client and
       verifies it with a `ping`; until that succeeds the connection reports
       `is_ready == False` and refuses to hand out the collection.
Who:   Constructed by the app factory, stored on `app.state`, and handed to
       route handlers through the `require_connection` dependency.
When:  Connected once during lifespan startup, closed once during shutdown.

Sharing rules:
    The connection object is shared by every request handler. Handlers only
    read from it; connect() and close() are reserved for the lifespan.
"""

import logging
from typing import Any, Optional

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from snippet_vault.config import Settings
from snippet_vault.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Owns the Motor client for one database/collection pair.

    States:
        not ready → connect() succeeds → ready → close() → not ready

    Attributes:
        uri:              MongoDB connection string
        db_name:          Database to select
        collection_name:  Collection holding snippet documents
        timeout_ms:       serverSelectionTimeoutMS / connectTimeoutMS
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        collection_name: str = "snippets",
        timeout_ms: int = 5000,
    ):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._collection: Optional[Any] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnection":
        return cls(
            uri=settings.mongo_uri,
            db_name=settings.db_name,
            collection_name=settings.collection_name,
            timeout_ms=settings.mongo_timeout_ms,
        )

    @property
    def is_ready(self) -> bool:
        """True once connect() succeeded and until close() runs."""
        return self._collection is not None

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """
        The snippets collection.

        Raises:
            StorageUnavailableError: connect() has not completed yet
        """
        if self._collection is None:
            raise StorageUnavailableError(
                context={"database": self.db_name, "collection": self.collection_name},
            )
        return self._collection

    async def connect(self) -> None:
        """
        Open the client and verify the server answers a ping.

        Raises:
            StorageUnavailableError: the server could not be reached in time
        """
        if self.is_ready:
            return

        client = AsyncIOMotorClient(
            self.uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            connectTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            raise StorageUnavailableError(
                message="Could not connect to MongoDB",
                context={"database": self.db_name, "error": str(e)},
            ) from e

        database: AsyncIOMotorDatabase = client[self.db_name]
        self._client = client
        self._collection = database[self.collection_name]
        logger.info("MongoDB connected to database: %s", self.db_name)

    async def close(self) -> None:
        """Close the client and drop back to the not-ready state."""
        self._collection = None
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")


# ── Request Dependency ────────────────────────────────────────────────────
async def require_connection(request: Request) -> MongoConnection:
    """
    FastAPI dependency: the app's connection, only if it is ready.

    Raises:
        StorageUnavailableError: the startup connect has not completed (→ 503)
    """
    connection: MongoConnection = request.app.state.connection
    if not connection.is_ready:
        raise StorageUnavailableError()
    return connection
