from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from photocatalog.core.modules.catalog.models import MetadataWithName
from photocatalog.core.modules.session.models import Identity
from photocatalog.web.deps import AppDep, IdentityDep, PageParamsDep
from photocatalog.web.openapi import ErrorResponse

router = APIRouter(tags=["catalog"])


class SearchRequest(BaseModel):
    """Free-text search request."""

    token: str = Field(..., description="Search text, matched fuzzily against names, descriptions and tags")


@router.get(
    "/user",
    summary="Get current user",
    description="Get the identity carried by the session cookie.",
    operation_id="getUser",
    responses={
        200: {"description": "Current identity"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
    },
)
async def get_user(identity: IdentityDep) -> Identity:
    return identity


@router.get(
    "/tags-with-sample",
    summary="List tags with a sample photo",
    description=(
        "Get every tag mapped to its most recently created photo, in ascending tag order. "
        "An empty object means the page is past the last tag."
    ),
    operation_id="getTagsWithSample",
    responses={
        200: {"description": "Page of tag to sample mapping"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def get_tags_with_sample(
    app: AppDep, identity: IdentityDep, page_params: PageParamsDep
) -> dict[str, MetadataWithName]:
    return await app.get_tags_with_sample(identity, page_params)


@router.get(
    "/metadatas-by-tag",
    summary="List photos by tag",
    description="Get photos carrying the tag (exact match), most recent first.",
    operation_id="getMetadatasByTag",
    responses={
        200: {"description": "Page of photos"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def get_metadatas_by_tag(
    app: AppDep,
    identity: IdentityDep,
    page_params: PageParamsDep,
    tag: Annotated[str, Query(description="Tag to filter by")],
) -> list[MetadataWithName]:
    return await app.get_metadatas_by_tag(identity, tag, page_params)


@router.post(
    "/search",
    summary="Search photos",
    description="Fuzzy search over photo names, descriptions and tags. Returns at most 30 photos, best match first.",
    operation_id="searchPhotos",
    responses={
        200: {"description": "Ranked photos"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def search(request: SearchRequest, app: AppDep, identity: IdentityDep) -> list[MetadataWithName]:
    return await app.search(identity, request.token)
