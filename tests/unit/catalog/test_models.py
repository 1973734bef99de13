"""Tests for catalog entry models."""

import json
from datetime import UTC, datetime

import pydantic
import pytest

from photocatalog.core.modules.catalog.models import Metadata, MetadataWithName, parse_tags

EARLY = datetime(2023, 1, 1, tzinfo=UTC)
LATE = datetime(2023, 1, 2, tzinfo=UTC)


class TestParseTags:
    """Tests for comma-separated tag parsing."""

    def test_trims_and_collapses_duplicates(self):
        """Test the canonical example from the upload form."""
        assert parse_tags("a, b, b, c") == {"a", "b", "c"}

    def test_drops_empty_items(self):
        """Test that empty and blank items are ignored."""
        assert parse_tags("") == set()
        assert parse_tags(" , a,, ") == {"a"}

    def test_case_preserved(self):
        """Test that tags are not case-normalized."""
        assert parse_tags("Sea, sea") == {"Sea", "sea"}


class TestMetadataSerialization:
    """Tests for the stored JSON format."""

    def test_camel_case_keys_and_sorted_tags(self):
        """Test that stored documents use camelCase and sorted tags."""
        metadata = Metadata(creator_email="a@x.com", created_at=EARLY, tags={"b", "a"}, description="d")

        document = json.loads(metadata.to_json_bytes())

        assert document == {
            "creatorEmail": "a@x.com",
            "createdAt": "2023-01-01T00:00:00Z",
            "tags": ["a", "b"],
            "description": "d",
        }

    def test_parses_stored_document(self):
        """Test that a stored document round-trips."""
        raw = b'{"creatorEmail":"a@x.com","createdAt":"2023-01-01T00:00:00Z","tags":["x","x"],"description":"d"}'

        metadata = Metadata.model_validate_json(raw)

        assert metadata.creator_email == "a@x.com"
        assert metadata.created_at == EARLY
        assert metadata.tags == {"x"}

    def test_naive_timestamp_rejected(self):
        """Test that timestamps without timezone are invalid."""
        raw = b'{"creatorEmail":"a@x.com","createdAt":"2023-01-01T00:00:00","tags":[],"description":""}'

        with pytest.raises(pydantic.ValidationError):
            Metadata.model_validate_json(raw)

    def test_with_name_serializes_flat(self):
        """Test that the name sits next to the metadata fields."""
        entry = Metadata(creator_email="a@x.com", created_at=EARLY, tags=set(), description="").with_name("x.jpg")

        assert entry.model_dump(by_alias=True, mode="json")["name"] == "x.jpg"
        assert "creatorEmail" in entry.model_dump(by_alias=True)

    def test_create_sets_created_at_now(self):
        """Test that new metadata is stamped with an aware timestamp."""
        metadata = Metadata.create("a@x.com", "a, b", "d")

        assert metadata.created_at.tzinfo is not None
        assert metadata.tags == {"a", "b"}


class TestOrdering:
    """Tests for equality and ordering."""

    def test_metadata_equal_iff_created_at_equal(self):
        """Test that equality ignores everything but created_at."""
        first = Metadata(creator_email="a@x.com", created_at=EARLY, tags={"a"}, description="one")
        second = Metadata(creator_email="b@x.com", created_at=EARLY, tags={"b"}, description="two")
        third = Metadata(creator_email="a@x.com", created_at=LATE, tags={"a"}, description="one")

        assert first == second
        assert first != third
        assert first < third
        assert third >= first

    def test_entries_ordered_by_created_at_then_name(self):
        """Test that named entries are totally ordered."""
        base = Metadata(creator_email="a@x.com", created_at=EARLY, tags=set(), description="")
        a = base.with_name("a")
        b = base.with_name("b")
        late = base.model_copy(update={"created_at": LATE}).with_name("a")

        assert a < b < late
        assert a != b
        assert sorted([late, b, a]) == [a, b, late]
        assert isinstance(a, MetadataWithName)
