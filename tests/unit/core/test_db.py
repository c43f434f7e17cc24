"""Tests for MongoDB helpers."""

import asyncio
from uuid import UUID

import pytest
from pymongo.errors import DuplicateKeyError, NetworkTimeout, ServerSelectionTimeoutError

from recordstore.core.db import upstream
from recordstore.core.modules.album.models import Album
from recordstore.errors import UpstreamUnavailableError


class TestMongoModel:
    """Tests for MongoModel conversions."""

    def test_to_mongo_renames_id(self):
        """Test that id is stored as _id."""
        album = Album(id=UUID("12345678-1234-5678-1234-567812345678"), title="X")
        data = album.to_mongo()
        assert data["_id"] == UUID("12345678-1234-5678-1234-567812345678")
        assert "id" not in data

    def test_validates_from_mongo_document(self):
        """Test that a stored document loads back through the _id alias."""
        album_id = UUID("12345678-1234-5678-1234-567812345678")
        album = Album.model_validate({"_id": album_id, "title": "X", "performer": None, "cost": 20})
        assert album.id == album_id
        assert album.cost == 20

    def test_json_uses_id(self):
        """Test that API serialization exposes id, not _id."""
        album = Album(title="X")
        assert "id" in album.model_dump(by_alias=True)


class TestUpstream:
    """Tests for the upstream decorator."""

    @pytest.mark.parametrize(
        "error", [NetworkTimeout("timed out"), ServerSelectionTimeoutError("no servers")]
    )
    def test_timeouts_become_upstream_unavailable(self, error):
        """Test that driver timeouts surface as UpstreamUnavailableError."""

        @upstream
        async def query() -> None:
            raise error

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            asyncio.run(query())
        assert exc_info.value.__cause__ is error

    def test_other_driver_errors_propagate(self):
        """Test that rejected operations are not reported as an outage."""

        @upstream
        async def query() -> None:
            raise DuplicateKeyError("E11000")

        with pytest.raises(DuplicateKeyError):
            asyncio.run(query())

    def test_result_passes_through(self):
        """Test that successful calls return their value."""

        @upstream
        async def query(value: int) -> int:
            return value * 2

        assert asyncio.run(query(21)) == 42
