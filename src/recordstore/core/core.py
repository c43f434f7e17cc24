from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from recordstore.config import Config
from recordstore.core.modules.session.registry import SessionRegistry

if TYPE_CHECKING:
    from recordstore.core.modules.album.service import AlbumService
    from recordstore.core.modules.purchase.service import PurchaseService
    from recordstore.core.modules.user.service import UserService

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    user: UserService
    album: AlbumService
    purchase: PurchaseService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Purchases populate users and albums, so they start last
        service_configs = [
            ("user", "recordstore.core.modules.user.service", "UserService"),
            ("album", "recordstore.core.modules.album.service", "AlbumService"),
            ("purchase", "recordstore.core.modules.purchase.service", "PurchaseService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database, session registry and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    sessions: SessionRegistry
    services: Services

    def __init__(
        self,
        config: Config,
        mongo_client: AsyncMongoClient[dict[str, Any]] | None = None,
        sessions: SessionRegistry | None = None,
    ) -> None:
        """Initialize core with config, MongoDB, an empty session registry, and auto-register services."""
        self.config = config
        if mongo_client is None:
            mongo_client = AsyncMongoClient(
                config.database_url,
                uuidRepresentation="standard",
                serverSelectionTimeoutMS=config.database_timeout_ms,
            )
        self.mongo_client = mongo_client
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Verify the database is reachable, then start all services.

        An unreachable database is fatal: the error is logged and re-raised so
        the server refuses to start instead of serving in a degraded mode.
        """
        try:
            await self.mongo_client.admin.command("ping")
        except PyMongoError:
            logger.exception("database_unreachable", database=self.database.name)
            raise
        await self.services.start_all()
        logger.info("core_started", database=self.database.name)

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
