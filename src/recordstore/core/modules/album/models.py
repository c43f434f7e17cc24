from recordstore.core.db import MongoModel


class Album(MongoModel):
    """Catalog entry. Every data field is optional; a full replace clears omitted ones."""

    title: str | None = None
    performer: str | None = None
    cost: float | None = None
