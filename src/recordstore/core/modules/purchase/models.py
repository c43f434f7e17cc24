from uuid import UUID

from pydantic import BaseModel, Field

from recordstore.core.db import MongoModel
from recordstore.core.modules.album.models import Album
from recordstore.core.modules.user.models import UserView


class Purchase(MongoModel):
    """A user buying an album. References are not checked for existence."""

    user: UUID
    album: UUID


class PurchaseView(BaseModel):
    """Purchase with its user and album references expanded (API representation)."""

    id: UUID = Field(..., description="Purchase ID")
    user: UserView | None = Field(..., description="Buyer, null if the user no longer exists")
    album: Album | None = Field(..., description="Purchased album, null if the album no longer exists")
