"""
Snippet Vault Backend - Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── fake_collection:  In-memory stand-in for the Motor snippets collection
    ├── fake_connection:  MongoConnection whose connect() binds fake_collection
    ├── connection:       `fake_connection` after connect()
    ├── repository:       SnippetRepository over `connection`
    ├── test_settings:    Settings with a dummy MONGO_URI
    ├── test_app:         App built by create_app() with `connection` injected
    ├── test_client:      HTTPX AsyncClient against `test_app`
    └── unready_client:   HTTPX AsyncClient against an app whose connection
                          never connected (ready gate closed)

No test needs a running MongoDB server.
"""

import os
from typing import Any, Dict, List, Optional

# Set before any snippet_vault import so the settings singleton picks them up
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ASCENDING
from pymongo.results import DeleteResult, InsertOneResult

from snippet_vault.config import Settings
from snippet_vault.database import MongoConnection
from snippet_vault.main import create_app
from snippet_vault.services.snippet_repository import SnippetRepository


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection
# ══════════════════════════════════════════════════════════════════════════


class FakeCursor:
    """The part of AsyncIOMotorCursor the repository uses: sort() and to_list()."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = [dict(doc) for doc in documents]

    def sort(self, key: str, direction: int = ASCENDING) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc[key], reverse=direction != ASCENDING)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return self._documents[:length]


class FakeCollection:
    """
    Minimal async collection: insert_one, find({}), delete_one({"_id": ...}).

    Documents live in `self.documents`; ids are real ObjectIds so identifier
    parsing behaves exactly as against MongoDB.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        stored = dict(document)
        stored["_id"] = ObjectId()
        self.documents.append(stored)
        return InsertOneResult(stored["_id"], acknowledged=True)

    def find(self, filter: Optional[Dict[str, Any]] = None) -> FakeCursor:
        assert not filter, "only find-all is supported"
        return FakeCursor(self.documents)

    async def delete_one(self, filter: Dict[str, Any]) -> DeleteResult:
        target = filter["_id"]
        for index, doc in enumerate(self.documents):
            if doc["_id"] == target:
                del self.documents[index]
                return DeleteResult({"n": 1, "ok": 1.0}, acknowledged=True)
        return DeleteResult({"n": 0, "ok": 1.0}, acknowledged=True)


class FakeMongoConnection(MongoConnection):
    """MongoConnection whose connect() binds an in-memory collection."""

    def __init__(self, collection: FakeCollection):
        super().__init__(uri="mongodb://localhost:27017", db_name="snippet_vault_test")
        self.fake_collection = collection

    async def connect(self) -> None:
        self._collection = self.fake_collection

    async def close(self) -> None:
        self._collection = None


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def fake_connection(fake_collection) -> FakeMongoConnection:
    """Not connected yet; connect() binds fake_collection."""
    return FakeMongoConnection(fake_collection)


@pytest_asyncio.fixture
async def connection(fake_connection):
    conn = fake_connection
    await conn.connect()
    yield conn
    await conn.close()


@pytest.fixture
def repository(connection) -> SnippetRepository:
    return SnippetRepository(connection)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(mongo_uri="mongodb://localhost:27017", log_level="WARNING")


@pytest.fixture
def test_app(test_settings, connection):
    return create_app(app_settings=test_settings, connection=connection)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    ASGITransport does not run the lifespan, so the injected connection is
    used exactly as the fixture prepared it.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def unready_client(test_settings):
    """Client for an app whose MongoConnection has not connected yet."""
    app = create_app(
        app_settings=test_settings,
        connection=MongoConnection.from_settings(test_settings),
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
