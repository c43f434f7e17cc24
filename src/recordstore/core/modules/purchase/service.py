from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from recordstore.core.core import Service
from recordstore.core.db import upstream
from recordstore.core.modules.purchase.models import Purchase, PurchaseView
from recordstore.core.modules.user.models import UserView

logger = structlog.get_logger(__name__)


class PurchaseService(Service):
    """Stores purchases and expands their references on read."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("purchases")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user", 1)])

    @upstream
    async def create_purchase(self, user_id: UUID, album_id: UUID) -> Purchase:
        purchase = Purchase(user=user_id, album=album_id)
        await self._collection.insert_one(purchase.to_mongo())
        logger.info("purchase_created", purchase_id=str(purchase.id), user_id=str(user_id), album_id=str(album_id))
        return purchase

    @upstream
    async def get_purchase(self, purchase_id: UUID) -> Purchase | None:
        doc = await self._collection.find_one({"_id": purchase_id})
        return Purchase.model_validate(doc) if doc else None

    async def populate(self, purchase: Purchase) -> PurchaseView:
        """Replace the user and album ids with the current records."""
        user = await self.core.services.user.get_user(purchase.user)
        album = await self.core.services.album.get_album(purchase.album)
        return PurchaseView(
            id=purchase.id,
            user=UserView.from_domain(user) if user else None,
            album=album,
        )
