from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from recordstore.core.core import Service
from recordstore.core.db import upstream
from recordstore.core.modules.album.models import Album

logger = structlog.get_logger(__name__)


class AlbumService(Service):
    """CRUD over the `albums` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("albums")

    @upstream
    async def list_albums(self) -> list[Album]:
        return await Album.list_cursor(self._collection.find({}))

    @upstream
    async def get_album(self, album_id: UUID) -> Album | None:
        doc = await self._collection.find_one({"_id": album_id})
        return Album.model_validate(doc) if doc else None

    @upstream
    async def create_album(self, title: str | None, performer: str | None, cost: float | None) -> Album:
        album = Album(title=title, performer=performer, cost=cost)
        await self._collection.insert_one(album.to_mongo())
        logger.info("album_created", album_id=str(album.id))
        return album

    @upstream
    async def replace_album(
        self, album_id: UUID, title: str | None, performer: str | None, cost: float | None
    ) -> Album | None:
        """Replace every field of the album; returns None if it does not exist."""
        replacement = Album(id=album_id, title=title, performer=performer, cost=cost).to_mongo()
        doc = await self._collection.find_one_and_replace(
            {"_id": album_id}, replacement, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            return None
        logger.info("album_replaced", album_id=str(album_id))
        return Album.model_validate(doc)

    @upstream
    async def delete_album(self, album_id: UUID) -> None:
        result = await self._collection.delete_one({"_id": album_id})
        logger.info("album_deleted", album_id=str(album_id), deleted=result.deleted_count)
