"""Object store backends for photo and metadata blobs."""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any, Protocol

import structlog
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage  # type: ignore[attr-defined]
from google.cloud.exceptions import GoogleCloudError, NotFound
from pydantic import BaseModel, Field

from photocatalog.errors import NotFoundError, StorageError

logger = structlog.get_logger(__name__)

# requests connection failures surface as OSError subclasses
_BACKEND_ERRORS = (GoogleCloudError, GoogleAuthError, OSError)


class StoredObject(BaseModel):
    """Object body together with the headers needed to serve it."""

    content: bytes = Field(..., description="Raw object bytes")
    content_type: str | None = Field(None, description="MIME type recorded by the store")
    content_encoding: str | None = Field(None, description="Content encoding recorded by the store")

    @property
    def size(self) -> int:
        return len(self.content)


class ObjectStore(Protocol):
    """Key/value blob storage with list-by-prefix."""

    async def get(self, key: str) -> StoredObject:
        """Fetch an object. Raises NotFoundError if the key does not exist."""

    async def put(self, key: str, content: bytes, content_type: str | None = None) -> None:
        """Create or overwrite an object."""

    async def delete(self, key: str) -> None:
        """Delete an object. Deleting a missing key is not an error."""

    def list_keys(self, prefix: str) -> AsyncIterator[str]:
        """Iterate all keys starting with prefix, following store pagination."""

    async def close(self) -> None:
        """Release client resources."""


class GcsObjectStore(ObjectStore):
    """Google Cloud Storage backed object store.

    The storage client is blocking, so every call is pushed to a worker
    thread. The client's own HTTP session bounds concurrent connections.
    """

    def __init__(self, client: storage.Client, bucket_name: str) -> None:
        self._client = client
        self._bucket = client.bucket(bucket_name)

    @classmethod
    def create(cls, bucket_name: str, project: str | None = None) -> "GcsObjectStore":
        """Create a store with a client built from default credentials."""
        return cls(storage.Client(project=project), bucket_name)

    async def get(self, key: str) -> StoredObject:
        blob = await self._run("get", key, self._bucket.get_blob, key)
        if blob is None:
            raise NotFoundError(f"Object not found: {key}")
        content = await self._run("download", key, blob.download_as_bytes, raw_download=True)
        return StoredObject(content=content, content_type=blob.content_type, content_encoding=blob.content_encoding)

    async def put(self, key: str, content: bytes, content_type: str | None = None) -> None:
        blob = self._bucket.blob(key)
        await self._run(
            "put", key, blob.upload_from_string, content, content_type=content_type or "application/octet-stream"
        )

    async def delete(self, key: str) -> None:
        try:
            await self._run("delete", key, self._bucket.delete_blob, key)
        except NotFoundError:
            logger.debug("Delete of missing object ignored", key=key)

    async def list_keys(self, prefix: str) -> AsyncIterator[str]:
        pages = self._client.list_blobs(self._bucket, prefix=prefix).pages
        while True:
            page = await self._run("list", prefix, next, pages, None)
            if page is None:
                return
            for blob in page:
                yield blob.name

    async def close(self) -> None:
        self._client.close()

    async def _run(self, operation: str, key: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except NotFound as e:
            raise NotFoundError(f"Object not found: {key}") from e
        except _BACKEND_ERRORS as e:
            logger.warning("Object store operation failed", operation=operation, key=key, error=str(e))
            raise StorageError(f"failed to {operation} object {key}") from e
