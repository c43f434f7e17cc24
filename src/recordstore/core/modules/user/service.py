import asyncio
import functools
from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from recordstore.core.core import Service
from recordstore.core.db import upstream
from recordstore.core.modules.user.models import User
from recordstore.core.modules.user.validators import BCRYPT_MAX_PASSWORD_BYTES, validate_email, validate_password
from recordstore.errors import ValidationError

logger = structlog.get_logger(__name__)


@functools.cache
def _dummy_hash() -> bytes:
    """Hash checked when the email is unknown, so both login failures cost one bcrypt round."""
    return bcrypt.hashpw(b"recordstore-dummy-password", bcrypt.gensalt())


class UserService(Service):
    """Manages user accounts stored in the `users` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)

    @upstream
    async def get_user(self, user_id: UUID) -> User | None:
        doc = await self._collection.find_one({"_id": user_id})
        return User.model_validate(doc) if doc else None

    @upstream
    async def get_user_by_email(self, email: str) -> User | None:
        doc = await self._collection.find_one({"email": email})
        return User.model_validate(doc) if doc else None

    @upstream
    async def create_user(self, name: str | None, email: str, password: str) -> User:
        """Create user with hashed password."""
        validate_email(email)
        validate_password(password)

        hashed = await asyncio.to_thread(bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt())
        password_hash = hashed.decode("utf-8")
        user = User(name=name, email=email, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError(f"User with email '{email}' already exists") from e
        logger.info("user_created", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str, password: str) -> User | None:
        """Return the user if the password matches its stored hash, None otherwise.

        Unknown emails still pay for one bcrypt check, so response time does not
        reveal which emails are registered.
        """
        user = await self.get_user_by_email(email)
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            return None  # could never have been stored
        password_hash = user.password_hash.encode("utf-8") if user else await asyncio.to_thread(_dummy_hash)
        matches = await asyncio.to_thread(bcrypt.checkpw, password_bytes, password_hash)
        if user is None or not matches:
            return None
        return user
