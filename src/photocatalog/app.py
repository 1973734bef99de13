from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager

import httpx

from photocatalog.config import Config
from photocatalog.core.core import Core
from photocatalog.core.modules.catalog.models import MetadataWithName
from photocatalog.core.modules.github.models import AuthorizationRequest
from photocatalog.core.modules.github.service import verify_state
from photocatalog.core.modules.session.models import Identity, SessionToken
from photocatalog.core.object_store import ObjectStore, StoredObject
from photocatalog.core.pagination import PageParams, paginate, paginate_mapping


class App:
    """Facade for all application operations.

    Protected operations take the Identity produced by authenticate(), so the
    access gate always runs before anything reaches the catalog.
    """

    def __init__(
        self, config: Config, object_store: ObjectStore | None = None, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._core = Core(config, object_store, http_client)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    def authenticate(self, cookie_headers: Sequence[str]) -> Identity:
        """Verify the session cookie and the allow-list."""
        return self._core.services.access.ensure_authenticated(cookie_headers)

    def start_login(self, redirect: str | None) -> AuthorizationRequest:
        """Build the GitHub authorize redirect."""
        return self._core.services.github.authorization_request(redirect)

    async def complete_login(
        self, code: str, redirect: str | None, expected_state: str | None, state: str | None
    ) -> SessionToken:
        """Check the anti-forgery token, exchange the OAuth code and mint a session token."""
        verify_state(expected_state, state)
        return await self._core.services.github.login(code, redirect)

    # === Catalog ===
    async def get_tags_with_sample(self, identity: Identity, params: PageParams) -> dict[str, MetadataWithName]:
        """Get one most recent sample per tag, paginated in tag order."""
        self._core.services.access.ensure_allowed(identity)
        return paginate_mapping(await self._core.services.catalog.tags_with_sample(), params)

    async def get_metadatas_by_tag(self, identity: Identity, tag: str, params: PageParams) -> list[MetadataWithName]:
        """Get entries with the tag, most recent first, paginated."""
        self._core.services.access.ensure_allowed(identity)
        return paginate(await self._core.services.catalog.by_tag(tag), params)

    async def search(self, identity: Identity, token: str) -> list[MetadataWithName]:
        """Fuzzy search over names, descriptions and tags."""
        self._core.services.access.ensure_allowed(identity)
        return await self._core.services.catalog.search(token)

    # === Photos ===
    async def create_photo(
        self, identity: Identity, name: str, raw_tags: str, description: str, content: bytes, content_type: str | None
    ) -> MetadataWithName:
        """Upload a photo and its metadata."""
        self._core.services.access.ensure_allowed(identity)
        return await self._core.services.photo.create_photo(identity, name, raw_tags, description, content, content_type)

    async def update_photo(self, identity: Identity, name: str, raw_tags: str, description: str) -> MetadataWithName:
        """Replace tags and description of a photo."""
        self._core.services.access.ensure_allowed(identity)
        return await self._core.services.photo.update_photo(name, raw_tags, description)

    async def delete_photo(self, identity: Identity, name: str) -> None:
        """Delete a photo and its metadata."""
        self._core.services.access.ensure_allowed(identity)
        await self._core.services.photo.delete_photo(name)

    # === Assets ===
    async def get_photo_asset(self, identity: Identity, name: str) -> StoredObject:
        """Get raw photo bytes."""
        self._core.services.access.ensure_allowed(identity)
        return await self._core.services.storage.get_photo(name)

    async def get_metadata_asset(self, identity: Identity, name: str) -> StoredObject:
        """Get the raw metadata document."""
        self._core.services.access.ensure_allowed(identity)
        return await self._core.services.storage.get_metadata_object(name)
