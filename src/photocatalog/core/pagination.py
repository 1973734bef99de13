from collections.abc import Iterable, Mapping
from itertools import islice
from typing import TypeVar

from pydantic import BaseModel, Field

K = TypeVar("K")
T = TypeVar("T")


class PageParams(BaseModel):
    """Page window over an already ordered sequence."""

    page: int = Field(0, description="Zero-based page number", ge=0)
    page_size: int = Field(..., description="Maximum items per page", ge=1)

    @property
    def offset(self) -> int:
        return self.page * self.page_size


def paginate(items: Iterable[T], params: PageParams) -> list[T]:
    """Skip page * page_size items, then take up to page_size. Never reorders."""
    return list(islice(items, params.offset, params.offset + params.page_size))


def paginate_mapping(mapping: Mapping[K, T], params: PageParams) -> dict[K, T]:
    """Window a mapping in its iteration order."""
    return dict(paginate(mapping.items(), params))
