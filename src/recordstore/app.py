from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

import structlog

from recordstore.config import Config
from recordstore.core.core import Core
from recordstore.core.modules.album.models import Album
from recordstore.core.modules.purchase.models import PurchaseView
from recordstore.core.modules.session.models import AuthToken
from recordstore.errors import AuthenticationError, ValidationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, checks session tokens before delegating to Core."""

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core if core is not None else Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def ensure_authenticated(self, auth_token: AuthToken | None) -> AuthToken:
        """Return the token if it is live, raise AuthenticationError otherwise."""
        if auth_token is None or not self._core.sessions.is_valid(auth_token):
            raise AuthenticationError("Invalid or missing session token")
        return auth_token

    async def signup(self, name: str | None, email: str, password: str) -> AuthToken:
        """Create a user account and open a session for it."""
        user = await self._core.services.user.create_user(name, email, password)
        logger.info("user_signed_up", user_id=str(user.id))
        return self._core.sessions.issue()

    async def login(self, email: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        user = await self._core.services.user.verify_credentials(email, password)
        if user is None:
            logger.info("login_failed")
            raise AuthenticationError("Invalid credentials")
        logger.info("user_logged_in", user_id=str(user.id))
        return self._core.sessions.issue()

    def logout(self, auth_token: AuthToken | None) -> None:
        """Invalidate the session token, if any. Unknown tokens are ignored."""
        self._core.sessions.revoke(auth_token)

    async def get_albums(self) -> list[Album]:
        return await self._core.services.album.list_albums()

    async def get_album(self, album_id: UUID) -> Album | None:
        return await self._core.services.album.get_album(album_id)

    async def create_album(
        self, auth_token: AuthToken, title: str | None, performer: str | None, cost: float | None
    ) -> Album:
        """Create album (requires authentication)."""
        self.ensure_authenticated(auth_token)
        return await self._core.services.album.create_album(title, performer, cost)

    async def replace_album(
        self, auth_token: AuthToken, album_id: UUID, title: str | None, performer: str | None, cost: float | None
    ) -> Album | None:
        """Replace all album fields (requires authentication)."""
        self.ensure_authenticated(auth_token)
        return await self._core.services.album.replace_album(album_id, title, performer, cost)

    async def delete_album(self, auth_token: AuthToken, album_id: UUID) -> None:
        """Delete album (requires authentication)."""
        self.ensure_authenticated(auth_token)
        await self._core.services.album.delete_album(album_id)

    async def create_purchase(self, auth_token: AuthToken, user_id: UUID | None, album_id: UUID | None) -> PurchaseView:
        """Record a purchase and return it with user and album expanded (requires authentication)."""
        self.ensure_authenticated(auth_token)
        if user_id is None:
            raise ValidationError("user field is required!")
        if album_id is None:
            raise ValidationError("album field is required!")

        purchase = await self._core.services.purchase.create_purchase(user_id, album_id)
        stored = await self._core.services.purchase.get_purchase(purchase.id)
        if stored is None:
            raise RuntimeError(f"Purchase '{purchase.id}' vanished after insert")
        return await self._core.services.purchase.populate(stored)
