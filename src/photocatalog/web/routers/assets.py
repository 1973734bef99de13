from fastapi import APIRouter
from fastapi.responses import Response

from photocatalog.core.object_store import StoredObject
from photocatalog.web.deps import AppDep, IdentityDep
from photocatalog.web.openapi import ErrorResponse

router = APIRouter(tags=["assets"])


def make_response_from_stored_object(stored: StoredObject) -> Response:
    """Serve object bytes with the type and encoding recorded by the store."""
    # Stored Content-Type is served verbatim, without an added charset
    headers = {"Content-Type": stored.content_type or "application/octet-stream"}
    if stored.content_encoding:
        headers["Content-Encoding"] = stored.content_encoding
    return Response(content=stored.content, headers=headers)


@router.get(
    "/photo/{name}",
    summary="Download photo",
    description="Get the raw photo bytes.",
    operation_id="downloadPhoto",
    response_class=Response,
    responses={
        200: {"description": "Photo bytes"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        404: {"model": ErrorResponse, "description": "Photo not found"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def download_photo(name: str, app: AppDep, identity: IdentityDep) -> Response:
    return make_response_from_stored_object(await app.get_photo_asset(identity, name))


@router.get(
    "/metadata/{name}",
    summary="Download metadata",
    description="Get the raw metadata JSON document of a photo.",
    operation_id="downloadMetadata",
    response_class=Response,
    responses={
        200: {"description": "Metadata document"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
        404: {"model": ErrorResponse, "description": "Photo not found"},
        500: {"model": ErrorResponse, "description": "Object store failure"},
    },
)
async def download_metadata(name: str, app: AppDep, identity: IdentityDep) -> Response:
    return make_response_from_stored_object(await app.get_metadata_asset(identity, name))
