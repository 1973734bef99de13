import asyncio

import pydantic
import structlog

from photocatalog.core.core import Service
from photocatalog.core.modules.catalog.models import Metadata, MetadataWithName
from photocatalog.core.modules.catalog.search import SEARCH_LIMIT, SearchIndex
from photocatalog.core.modules.storage.service import name_from_metadata_key
from photocatalog.errors import NotFoundError

logger = structlog.get_logger(__name__)


def aggregate_tags(entries: list[MetadataWithName]) -> dict[str, MetadataWithName]:
    """Map every tag to its most recent entry, keyed in ascending tag order.

    Recency is compared by (created_at, name), so the result does not
    depend on the order of entries.
    """
    samples: dict[str, MetadataWithName] = {}
    for entry in entries:
        for tag in entry.tags:
            current = samples.get(tag)
            if current is None or entry.sort_key > current.sort_key:
                samples[tag] = entry
    return dict(sorted(samples.items()))


def filter_by_tag(entries: list[MetadataWithName], tag: str) -> list[MetadataWithName]:
    """Entries carrying tag (exact match), most recent first."""
    matching = [entry for entry in entries if tag in entry.tags]
    return sorted(matching, key=lambda entry: entry.created_at, reverse=True)


class CatalogService(Service):
    """Builds catalog views from the metadata objects in the object store.

    Nothing is cached: every call lists and fetches the store again.
    """

    async def list_all(self) -> list[MetadataWithName]:
        """Fetch every metadata object and parse it into a catalog entry.

        Objects that fail to parse are skipped. Any storage failure aborts
        the listing with StorageError.
        """
        storage = self.core.services.storage
        keys = [key async for key in storage.list_metadata_keys()]
        results = await asyncio.gather(*(self._fetch_entry(key) for key in keys))
        entries = [entry for entry in results if entry is not None]
        logger.debug("Listed catalog", keys=len(keys), entries=len(entries))
        return entries

    async def tags_with_sample(self) -> dict[str, MetadataWithName]:
        return aggregate_tags(await self.list_all())

    async def by_tag(self, tag: str) -> list[MetadataWithName]:
        return filter_by_tag(await self.list_all(), tag)

    async def search(self, query: str) -> list[MetadataWithName]:
        index = SearchIndex.build(await self.list_all())
        return index.search(query, SEARCH_LIMIT)

    async def _fetch_entry(self, key: str) -> MetadataWithName | None:
        name = name_from_metadata_key(key)
        try:
            stored = await self.core.object_store.get(key)
        except NotFoundError:
            logger.debug("Metadata object vanished during listing", key=key)
            return None
        try:
            metadata = Metadata.model_validate_json(stored.content)
        except pydantic.ValidationError:
            logger.debug("Skipping malformed metadata object", key=key)
            return None
        return metadata.with_name(name)
