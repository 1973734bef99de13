from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from photocatalog.core.modules.session.models import SESSION_COOKIE_NAME

PUBLIC_ENDPOINTS = {
    ("GET", "/health"),
    ("GET", "/auth/github"),
    ("GET", "/auth/authorized"),
    ("GET", "/auth/logout"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Photo Catalog API",
            version="0.1.0",
            summary="Authenticated photo catalog backed by an object store",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "Signed session token set by the GitHub login callback",
            },
        }

        # Apply security globally, then remove it from public endpoints
        openapi_schema["security"] = [{"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "user not authorized", "type": "user_not_authorized"},
                {"message": "user not allowed", "type": "user_not_allowed"},
                {"message": "failed to request the object store", "type": "storage_error"},
            ]
        }
    }
