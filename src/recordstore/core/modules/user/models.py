from uuid import UUID

from pydantic import BaseModel, Field

from recordstore.core.db import MongoModel


class User(MongoModel):
    """User domain model with credentials."""

    name: str | None = None
    email: str
    password_hash: str  # bcrypt hash


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    name: str | None = Field(None, description="Display name")
    email: str = Field(..., description="Email address used to log in")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, email=user.email)
