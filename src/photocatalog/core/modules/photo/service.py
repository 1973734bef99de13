import structlog

from photocatalog.core.core import Service
from photocatalog.core.modules.catalog.models import Metadata, MetadataWithName, parse_tags
from photocatalog.core.modules.session.models import Identity
from photocatalog.errors import ValidationError

logger = structlog.get_logger(__name__)


def validate_photo_name(name: str) -> str:
    """Ensure a photo name maps to exactly one photo/ and metadata/ key."""
    if not name or "/" in name or name != name.strip():
        raise ValidationError(f"Invalid photo name: {name!r}")
    return name


class PhotoService(Service):
    """Create, update and delete photos together with their metadata."""

    async def create_photo(
        self, identity: Identity, name: str, raw_tags: str, description: str, content: bytes, content_type: str | None
    ) -> MetadataWithName:
        """Upload a new photo owned by the caller.

        Args:
            identity: Authenticated caller, recorded as creator
            name: Photo name, unique within the catalog
            raw_tags: Comma-separated tags
            description: Free-text description
            content: Photo bytes, stored as-is
            content_type: MIME type of the photo bytes

        Returns:
            The stored catalog entry
        """
        validate_photo_name(name)
        metadata = Metadata.create(identity.primary_email, raw_tags, description)
        await self.core.services.storage.upload_photo(name, metadata, content, content_type)
        logger.info("Created photo", name=name, size=len(content), creator=identity.primary_email)
        return metadata.with_name(name)

    async def update_photo(self, name: str, raw_tags: str, description: str) -> MetadataWithName:
        """Replace tags and description, keeping creator and creation time."""
        validate_photo_name(name)
        current = await self.core.services.storage.get_metadata(name)
        updated = current.model_copy(update={"tags": parse_tags(raw_tags), "description": description})
        await self.core.services.storage.put_metadata(name, updated)
        logger.info("Updated photo", name=name)
        return updated.with_name(name)

    async def delete_photo(self, name: str) -> None:
        validate_photo_name(name)
        await self.core.services.storage.delete_photo(name)
        logger.info("Deleted photo", name=name)
