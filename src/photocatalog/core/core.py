from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

import httpx

from photocatalog.config import Config
from photocatalog.core.object_store import GcsObjectStore, ObjectStore

if TYPE_CHECKING:
    from photocatalog.core.modules.access.service import AccessService
    from photocatalog.core.modules.catalog.service import CatalogService
    from photocatalog.core.modules.github.service import GitHubService
    from photocatalog.core.modules.photo.service import PhotoService
    from photocatalog.core.modules.session.service import SessionService
    from photocatalog.core.modules.storage.service import StorageService

USER_AGENT = "photocatalog/0.1.0"


class Service:
    """Base class for services sharing the core context."""

    def __init__(self) -> None:
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

    storage: StorageService
    catalog: CatalogService
    photo: PhotoService
    session: SessionService
    access: AccessService
    github: GitHubService

    def __init__(self) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("storage", "photocatalog.core.modules.storage.service", "StorageService"),
            ("catalog", "photocatalog.core.modules.catalog.service", "CatalogService"),
            ("photo", "photocatalog.core.modules.photo.service", "PhotoService"),
            ("session", "photocatalog.core.modules.session.service", "SessionService"),
            ("access", "photocatalog.core.modules.access.service", "AccessService"),
            ("github", "photocatalog.core.modules.github.service", "GitHubService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class()
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
    """Container providing config, external clients, and all service instances."""

    config: Config
    object_store: ObjectStore
    http_client: httpx.AsyncClient
    services: Services

    def __init__(
        self, config: Config, object_store: ObjectStore | None = None, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize core with config and clients, and auto-register services.

        Clients are built from config unless given, which lets tests swap in fakes.
        """
        self.config = config
        self.object_store = object_store or GcsObjectStore.create(config.bucket_name, config.gcs_project)
        self.http_client = http_client or httpx.AsyncClient(headers={"User-Agent": USER_AGENT}, timeout=15)
        self.services = Services()
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
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close external clients on shutdown."""
        await self.services.stop_all()
        await self.http_client.aclose()
        await self.object_store.close()
