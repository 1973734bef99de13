"""Catalog entry models.

Metadata documents are stored as camelCase JSON, e.g.::

    {"creatorEmail": "a@x.com", "createdAt": "2023-01-02T03:04:05Z",
     "tags": ["bay", "sunset"], "description": "sunset over the bay"}
"""

from datetime import datetime
from functools import total_ordering
from typing import Self

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from photocatalog.utils import now


def parse_tags(raw_tags: str) -> set[str]:
    """Split comma-separated tags, trimming each and dropping empty ones."""
    return {tag.strip() for tag in raw_tags.split(",") if tag.strip()}


@total_ordering
class Metadata(BaseModel):
    """Metadata of a single photo. Equality and ordering use created_at only."""

    creator_email: str = Field(..., description="Primary email of the uploader")
    created_at: AwareDatetime = Field(..., description="Creation time, never changed by updates")
    tags: set[str] = Field(..., description="Tags, serialized as a sorted list")
    description: str = Field(..., description="Free-text description")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def create(cls, creator_email: str, raw_tags: str, description: str) -> Self:
        return cls(creator_email=creator_email, created_at=now(), tags=parse_tags(raw_tags), description=description)

    @field_serializer("tags")
    def serialize_tags(self, tags: set[str]) -> list[str]:
        return sorted(tags)

    def with_name(self, name: str) -> "MetadataWithName":
        return MetadataWithName(
            creator_email=self.creator_email,
            created_at=self.created_at,
            tags=self.tags,
            description=self.description,
            name=name,
        )

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self.created_at == other.created_at

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self.created_at < other.created_at


@total_ordering
class MetadataWithName(Metadata):
    """Catalog entry: photo metadata plus its unique name, ordered by (created_at, name)."""

    name: str = Field(..., description="Photo identifier derived from the object key")

    @property
    def sort_key(self) -> tuple[datetime, str]:
        return self.created_at, self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataWithName):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MetadataWithName):
            return NotImplemented
        return self.sort_key < other.sort_key
