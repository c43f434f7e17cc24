"""Tests for Core startup and shutdown."""

import asyncio

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from recordstore.core.core import Core
from recordstore.core.modules.session.registry import SessionRegistry


class TestCoreStartup:
    """Tests for Core.on_start and Core.lifespan."""

    def test_unreachable_database_is_fatal(self, config, mongo_client):
        """Test that a failed ping aborts startup before services start."""
        mongo_client.admin.fail_with = ServerSelectionTimeoutError("no servers")
        core = Core(config, mongo_client=mongo_client)

        with pytest.raises(ServerSelectionTimeoutError):
            asyncio.run(core.on_start())
        assert mongo_client.get_database("recordstore_test").get_collection("users").unique_fields == []

    def test_start_creates_indexes(self, core, database):
        """Test that services create their indexes on startup."""
        asyncio.run(core.on_start())
        assert database.get_collection("users").unique_fields == ["email"]

    def test_lifespan_closes_client(self, core, mongo_client):
        """Test that the MongoDB client is closed on shutdown."""

        async def run() -> None:
            async with core.lifespan():
                assert not mongo_client.closed

        asyncio.run(run())
        assert mongo_client.closed

    def test_database_name_from_url(self, core):
        """Test that the database name is taken from the URL path."""
        assert core.database.name == "recordstore_test"

    def test_injected_registry_is_used(self, config, mongo_client):
        """Test that a registry passed in is the one the core exposes."""
        registry = SessionRegistry()
        core = Core(config, mongo_client=mongo_client, sessions=registry)
        assert core.sessions is registry

    def test_default_registry_is_empty(self, config, mongo_client):
        """Test that each core starts with no sessions."""
        core = Core(config, mongo_client=mongo_client)
        assert len(core.sessions) == 0
