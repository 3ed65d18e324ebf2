"""
Snippet Vault Backend - Snippet Repository
============================================

What:  The only boundary between the API layer and the snippets collection.
How:   Validates create input, stamps `createdAt`, turns client id strings
       into ObjectIds, and maps driver failures to StorageUnavailableError.
Who:   Built per request by `get_snippet_repository`; used by the snippet
       routes.

Outcomes:
    list_all()       → List[Snippet]          | StorageUnavailableError
    create(...)      → inserted id (str)      | ValidationError, StorageUnavailableError
    delete_by_id(id) → DeleteOutcome          | StorageUnavailableError

The repository does not log. Callers decide what a failure means for the
response and what is worth recording.
"""

import enum
from datetime import datetime, timezone
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends
from pymongo import ASCENDING
from pymongo.errors import ConnectionFailure, ExecutionTimeout

from snippet_vault.database import MongoConnection, require_connection
from snippet_vault.exceptions import StorageUnavailableError, ValidationError
from snippet_vault.models.snippet import Snippet

# ConnectionFailure covers AutoReconnect, NetworkTimeout and
# ServerSelectionTimeoutError.
UNAVAILABLE_ERRORS = (ConnectionFailure, ExecutionTimeout)

REQUIRED_FIELDS_MESSAGE = "title, language, and code are required"


class DeleteOutcome(enum.Enum):
    """Result of delete_by_id. Exactly one applies per call."""

    DELETED = "deleted"
    INVALID_IDENTIFIER = "invalid_identifier"
    NOT_FOUND = "not_found"


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Coerce a client-supplied id into an ObjectId, or None if malformed."""
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _clean(value: Any) -> str:
    """Trimmed string, or "" for anything that is not a string."""
    if not isinstance(value, str):
        return ""
    return value.strip()


class SnippetRepository:
    """
    Snippet persistence operations against one MongoDB collection.

    The collection is looked up through the connection on every call, so a
    connection that is not ready yet raises StorageUnavailableError instead
    of failing on a missing handle.
    """

    def __init__(self, connection: MongoConnection):
        self._connection = connection

    @property
    def _collection(self):
        return self._connection.collection

    async def list_all(self) -> List[Snippet]:
        """
        Every stored snippet, oldest first. Empty list on an empty collection.

        Raises:
            StorageUnavailableError: MongoDB unreachable or timed out
        """
        try:
            cursor = self._collection.find({}).sort("_id", ASCENDING)
            documents = await cursor.to_list(length=None)
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(
                message="Database is unavailable. Try again in a moment.",
                context={"operation": "list", "error": type(e).__name__},
            ) from e
        return [Snippet.from_document(doc) for doc in documents]

    async def create(self, title: Any, language: Any, code: Any) -> str:
        """
        Insert a new snippet and return its server-assigned id.

        `title` and `language` are stored trimmed; `code` is stored verbatim
        and only checked for blankness. Nothing is written when validation
        fails.

        Raises:
            ValidationError: any field missing, non-text, or blank after trim
            StorageUnavailableError: MongoDB unreachable or timed out
        """
        values = {
            "title": _clean(title),
            "language": _clean(language),
            "code": code if isinstance(code, str) else "",
        }
        missing = [name for name, value in values.items() if not value.strip()]
        if missing:
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                field=missing[0],
                context={"fields": missing},
            )

        snippet = Snippet(
            title=values["title"],
            language=values["language"],
            code=values["code"],
            created_at=datetime.now(timezone.utc),
        )
        try:
            result = await self._collection.insert_one(snippet.to_document())
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(
                message="Database is unavailable. Try again in a moment.",
                context={"operation": "create", "error": type(e).__name__},
            ) from e
        return str(result.inserted_id)

    async def delete_by_id(self, snippet_id: Any) -> DeleteOutcome:
        """
        Remove the snippet with the given id.

        A malformed id never reaches the database.

        Raises:
            StorageUnavailableError: MongoDB unreachable or timed out
        """
        object_id = parse_object_id(snippet_id)
        if object_id is None:
            return DeleteOutcome.INVALID_IDENTIFIER

        try:
            result = await self._collection.delete_one({"_id": object_id})
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(
                message="Database is unavailable. Try again in a moment.",
                context={"operation": "delete", "error": type(e).__name__},
            ) from e

        if result.deleted_count == 0:
            return DeleteOutcome.NOT_FOUND
        return DeleteOutcome.DELETED


# ── Request Dependency ────────────────────────────────────────────────────
async def get_snippet_repository(
    connection: MongoConnection = Depends(require_connection),
) -> SnippetRepository:
    """FastAPI dependency: a repository bound to the ready connection."""
    return SnippetRepository(connection)
