from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

from photocatalog.app import App
from photocatalog.config import Config
from photocatalog.errors import ServerError, UserError
from photocatalog.web.error_handlers import app_error_handler, general_exception_handler
from photocatalog.web.openapi import set_custom_openapi
from photocatalog.web.routers import assets_router, auth_router, catalog_router, photos_router

logger = structlog.get_logger(__name__)

# First path segments owned by the API; unknown paths under them stay 404
BACKEND_PREFIXES = frozenset({"api", "asset", "auth", "health"})


class SpaStaticFiles(StaticFiles):
    """Static frontend that answers unknown paths with index.html for client-side routing."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as e:
            if e.status_code != 404 or path.split("/", 1)[0] in BACKEND_PREFIXES:
                raise
            return await super().get_response("index.html", scope)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        # Store app instance in app state
        app.state.app = app_instance
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Photo Catalog API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    # Health check endpoint (at root level, public)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(catalog_router, prefix="/api")
    app.include_router(photos_router, prefix="/api")
    app.include_router(assets_router, prefix="/asset")
    app.include_router(auth_router, prefix="/auth")

    # Register error handlers
    app.add_exception_handler(UserError, app_error_handler)
    app.add_exception_handler(ServerError, app_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    # Frontend build, mounted last so it only catches what no route matched
    static_directory = Path(config.static_file_directory)
    if static_directory.is_dir():
        app.mount("/", SpaStaticFiles(directory=static_directory, html=True), name="static")
    else:
        logger.warning("Static file directory not found, frontend disabled", path=str(static_directory))

    return app
