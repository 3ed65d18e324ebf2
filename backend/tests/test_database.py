"""
Snippet Vault Backend - Connection Lifecycle Tests
===================================================

What:  Tests for MongoConnection, the ready gate, and the app lifespan.
How:   AsyncIOMotorClient is patched with MagicMock so nothing touches the
       network; setup_logging is patched so the lifespan leaves pytest's log
       capture alone.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from snippet_vault.config import Settings
from snippet_vault.database import MongoConnection
from snippet_vault.exceptions import StorageUnavailableError
from snippet_vault.main import create_app


def _mock_client(ping_side_effect=None):
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0}, side_effect=ping_side_effect)
    return client


class TestMongoConnection:

    def test_new_connection_is_not_ready(self):
        conn = MongoConnection("mongodb://localhost:27017", "codesnippetdb")

        assert conn.is_ready is False
        with pytest.raises(StorageUnavailableError):
            conn.collection

    def test_from_settings_copies_values(self):
        settings = Settings(
            mongo_uri="mongodb://db:27017",
            db_name="vault",
            collection_name="items",
            mongo_timeout_ms=1500,
        )

        conn = MongoConnection.from_settings(settings)

        assert (conn.uri, conn.db_name, conn.collection_name, conn.timeout_ms) == (
            "mongodb://db:27017",
            "vault",
            "items",
            1500,
        )

    @pytest.mark.asyncio
    async def test_connect_pings_and_opens_gate(self):
        client = _mock_client()
        conn = MongoConnection("mongodb://localhost:27017", "codesnippetdb", timeout_ms=2000)

        with patch("snippet_vault.database.AsyncIOMotorClient", return_value=client) as factory:
            await conn.connect()

        factory.assert_called_once_with(
            "mongodb://localhost:27017",
            serverSelectionTimeoutMS=2000,
            connectTimeoutMS=2000,
            tz_aware=True,
        )
        client.admin.command.assert_awaited_once_with("ping")
        assert conn.is_ready is True
        assert conn.collection is client["codesnippetdb"]["snippets"]

    @pytest.mark.asyncio
    async def test_connect_failure_keeps_gate_closed(self):
        client = _mock_client(ping_side_effect=ServerSelectionTimeoutError("no servers"))
        conn = MongoConnection("mongodb://localhost:27017", "codesnippetdb")

        with patch("snippet_vault.database.AsyncIOMotorClient", return_value=client):
            with pytest.raises(StorageUnavailableError, match="Could not connect"):
                await conn.connect()

        assert conn.is_ready is False
        client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client = _mock_client()
        conn = MongoConnection("mongodb://localhost:27017", "codesnippetdb")

        with patch("snippet_vault.database.AsyncIOMotorClient", return_value=client):
            await conn.connect()
        await conn.close()

        assert conn.is_ready is False
        client.close.assert_called_once()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_connects_and_shutdown_closes(self, test_settings, fake_connection):
        conn = fake_connection
        app = create_app(app_settings=test_settings, connection=conn)

        with patch("snippet_vault.main.setup_logging"):
            async with app.router.lifespan_context(app):
                assert conn.is_ready is True

        assert conn.is_ready is False

    @pytest.mark.asyncio
    async def test_missing_mongo_uri_aborts_startup(self, fake_connection):
        conn = fake_connection
        app = create_app(app_settings=Settings(mongo_uri=""), connection=conn)

        with patch("snippet_vault.main.setup_logging"):
            with pytest.raises(ValueError, match="MONGO_URI"):
                async with app.router.lifespan_context(app):
                    pass

        assert conn.is_ready is False

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_startup(self, test_settings):
        conn = MongoConnection.from_settings(test_settings)
        conn.connect = AsyncMock(side_effect=StorageUnavailableError("Could not connect to MongoDB"))
        app = create_app(app_settings=test_settings, connection=conn)

        with patch("snippet_vault.main.setup_logging"):
            with pytest.raises(StorageUnavailableError):
                async with app.router.lifespan_context(app):
                    pass
