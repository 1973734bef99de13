"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime

import httpx
import pytest

from photocatalog.app import App
from photocatalog.config import Config
from photocatalog.core.core import Core
from photocatalog.core.modules.catalog.models import Metadata
from photocatalog.core.object_store import ObjectStore, StoredObject
from photocatalog.errors import NotFoundError, StorageError

ALLOWED_EMAIL = "alice@example.com"
JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


class InMemoryObjectStore(ObjectStore):
    """Dict-backed object store that lists keys in pages, like a real bucket."""

    def __init__(self, page_size: int = 2) -> None:
        self.objects: dict[str, StoredObject] = {}
        self.page_size = page_size
        self.failing_keys: set[str] = set()
        self.list_pages_served = 0
        self.deleted_keys: list[str] = []
        self.closed = False

    def put_raw(self, key: str, content: bytes, content_type: str | None = None) -> None:
        self.objects[key] = StoredObject(content=content, content_type=content_type)

    def _check(self, key: str) -> None:
        if key in self.failing_keys:
            raise StorageError(f"failed to access object {key}")

    async def get(self, key: str) -> StoredObject:
        self._check(key)
        if key not in self.objects:
            raise NotFoundError(f"Object not found: {key}")
        return self.objects[key]

    async def put(self, key: str, content: bytes, content_type: str | None = None) -> None:
        self._check(key)
        self.put_raw(key, content, content_type)

    async def delete(self, key: str) -> None:
        self.deleted_keys.append(key)
        self._check(key)
        self.objects.pop(key, None)

    async def list_keys(self, prefix: str) -> AsyncIterator[str]:
        self._check(prefix)
        keys = sorted(key for key in self.objects if key.startswith(prefix))
        for start in range(0, len(keys), self.page_size):
            self.list_pages_served += 1
            for key in keys[start : start + self.page_size]:
                yield key

    async def close(self) -> None:
        self.closed = True


def make_metadata(
    created_at: datetime | None = None,
    tags: set[str] | None = None,
    description: str = "",
    creator_email: str = ALLOWED_EMAIL,
) -> Metadata:
    return Metadata(
        creator_email=creator_email,
        created_at=created_at or datetime(2023, 1, 1, tzinfo=UTC),
        tags=tags or set(),
        description=description,
    )


def github_handler(emails: list[dict[str, object]]) -> Callable[[httpx.Request], httpx.Response]:
    """Fake GitHub token and emails endpoints."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/login/oauth/access_token":
            return httpx.Response(200, json={"access_token": "gho_token", "token_type": "bearer"})
        if request.url.path == "/user/emails":
            assert request.headers["Authorization"] == "Bearer gho_token"
            return httpx.Response(200, json=emails)
        return httpx.Response(404)

    return handler


@pytest.fixture
def config():
    """Create a test configuration."""
    return Config(
        github_client_id="client-id",
        github_client_secret="client-secret",
        public_url="https://photos.example.com/",
        jwt_secret=JWT_SECRET,
        bucket_name="test-bucket",
        allowed_emails=[ALLOWED_EMAIL],
        static_file_directory="/nonexistent/frontend/build",
    )


@pytest.fixture
def store():
    """Create an empty in-memory object store."""
    return InMemoryObjectStore()


@pytest.fixture
def github_emails():
    """Email list returned by the fake GitHub API."""
    return [
        {"email": "alice@users.noreply.github.com", "verified": True, "primary": False},
        {"email": ALLOWED_EMAIL, "verified": True, "primary": True},
        {"email": "unverified@example.com", "verified": False, "primary": False},
    ]


@pytest.fixture
def http_client(github_emails):
    """Create an httpx client talking to the fake GitHub API."""
    return httpx.AsyncClient(transport=httpx.MockTransport(github_handler(github_emails)))


@pytest.fixture
def core(config, store, http_client):
    """Create a core wired to the in-memory store and fake GitHub."""
    return Core(config, object_store=store, http_client=http_client)


@pytest.fixture
def app(config, store, http_client):
    """Create an application facade wired to test doubles."""
    return App(config, object_store=store, http_client=http_client)


@pytest.fixture
def metadata_factory():
    """Factory for Metadata with sensible defaults."""
    return make_metadata


@pytest.fixture
def add_entry(store):
    """Store a metadata document under metadata/<name>.json."""

    def add(name: str, created_at: datetime, tags: set[str], description: str = "") -> Metadata:
        metadata = make_metadata(created_at=created_at, tags=tags, description=description)
        store.put_raw(f"metadata/{name}.json", metadata.to_json_bytes(), "application/json")
        return metadata

    return add


@pytest.fixture
def session_token(core):
    """Valid session token for the allow-listed user."""
    return core.services.session.mint(ALLOWED_EMAIL, [ALLOWED_EMAIL])
