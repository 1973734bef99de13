from typing import Annotated

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from photocatalog.core.modules.catalog.models import MetadataWithName
from photocatalog.web.deps import AppDep, IdentityDep
from photocatalog.web.openapi import ErrorResponse

router = APIRouter(tags=["photos"])


class UpdatePhotoRequest(BaseModel):
    """Request to replace photo tags and description."""

    tags: str = Field(..., description="Comma-separated tags, e.g. `sunset, bay`")
    description: str = Field(..., description="Free-text description")

    model_config = {"json_schema_extra": {"examples": [{"tags": "sunset, bay", "description": "Sunset over the bay"}]}}


@router.post(
    "/photo/{name}",
    summary="Upload photo",
    description=(
        "Upload a photo. The request body is the raw photo; its Content-Type is stored with it. "
        "Tags are comma-separated; each is trimmed and duplicates are collapsed."
    ),
    operation_id="createPhoto",
    status_code=201,
    responses={
        201: {"description": "Photo uploaded"},
        400: {"model": ErrorResponse, "description": "Invalid photo name"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def create_photo(
    name: str,
    request: Request,
    app: AppDep,
    identity: IdentityDep,
    tags: Annotated[str, Query(description="Comma-separated tags")] = "",
    description: Annotated[str, Query(description="Free-text description")] = "",
) -> MetadataWithName:
    content = await request.body()
    content_type = request.headers.get("content-type")
    return await app.create_photo(identity, name, tags, description, content, content_type)


@router.put(
    "/photo/{name}",
    summary="Update photo metadata",
    description="Replace tags and description. Creator and creation time are kept.",
    operation_id="updatePhoto",
    responses={
        200: {"description": "Photo updated"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        404: {"model": ErrorResponse, "description": "Photo not found"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def update_photo(
    name: str, request: UpdatePhotoRequest, app: AppDep, identity: IdentityDep
) -> MetadataWithName:
    return await app.update_photo(identity, name, request.tags, request.description)


@router.delete(
    "/photo/{name}",
    summary="Delete photo",
    description="Delete a photo and its metadata. Deleting a missing photo succeeds.",
    operation_id="deletePhoto",
    status_code=204,
    responses={
        204: {"description": "Photo deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def delete_photo(name: str, app: AppDep, identity: IdentityDep) -> None:
    await app.delete_photo(identity, name)
