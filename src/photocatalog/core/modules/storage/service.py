import asyncio
from collections.abc import AsyncIterator

import pydantic
import structlog

from photocatalog.core.core import Service
from photocatalog.core.modules.catalog.models import Metadata
from photocatalog.core.object_store import ObjectStore, StoredObject
from photocatalog.errors import StorageError

logger = structlog.get_logger(__name__)

PHOTO_PREFIX = "photo/"
METADATA_PREFIX = "metadata/"
METADATA_SUFFIX = ".json"


def photo_key(name: str) -> str:
    return f"{PHOTO_PREFIX}{name}"


def metadata_key(name: str) -> str:
    return f"{METADATA_PREFIX}{name}{METADATA_SUFFIX}"


def name_from_metadata_key(key: str) -> str:
    """Derive the photo name from a metadata key: metadata/<name>.json -> <name>."""
    return key.removeprefix(METADATA_PREFIX).removesuffix(METADATA_SUFFIX)


class StorageService(Service):
    """Typed gateway to the object store using the photo/ and metadata/ key scheme."""

    @property
    def _store(self) -> ObjectStore:
        return self.core.object_store

    async def get_photo(self, name: str) -> StoredObject:
        return await self._store.get(photo_key(name))

    async def get_metadata_object(self, name: str) -> StoredObject:
        return await self._store.get(metadata_key(name))

    async def get_metadata(self, name: str) -> Metadata:
        """Fetch and parse metadata of a photo.

        Raises:
            NotFoundError: If the metadata object does not exist
            StorageError: If the stored document is malformed
        """
        stored = await self.get_metadata_object(name)
        try:
            return Metadata.model_validate_json(stored.content)
        except pydantic.ValidationError as e:
            logger.warning("Malformed metadata object", name=name, error=str(e))
            raise StorageError(f"malformed metadata for {name}") from e

    async def put_photo(self, name: str, content: bytes, content_type: str | None = None) -> None:
        await self._store.put(photo_key(name), content, content_type)

    async def put_metadata(self, name: str, metadata: Metadata) -> None:
        await self._store.put(metadata_key(name), metadata.to_json_bytes(), "application/json")

    async def upload_photo(self, name: str, metadata: Metadata, content: bytes, content_type: str | None = None) -> None:
        """Write the photo blob, then its metadata document.

        Not atomic: a failure after the first write leaves a photo without
        metadata, which catalog listing never sees.
        """
        await self.put_photo(name, content, content_type)
        await self.put_metadata(name, metadata)

    async def delete_photo(self, name: str) -> None:
        """Delete both the photo and its metadata.

        Both deletions are attempted; failures are reported together.
        """
        keys = [photo_key(name), metadata_key(name)]
        results = await asyncio.gather(*(self._store.delete(key) for key in keys), return_exceptions=True)
        failed = [(key, result) for key, result in zip(keys, results, strict=True) if isinstance(result, BaseException)]
        if failed:
            for key, error in failed:
                logger.warning("Failed to delete object", key=key, error=str(error))
            raise StorageError(f"failed to delete {', '.join(key for key, _ in failed)}") from failed[0][1]

    def list_metadata_keys(self) -> AsyncIterator[str]:
        return self._store.list_keys(METADATA_PREFIX)
