from photocatalog.web.routers.assets import router as assets_router
from photocatalog.web.routers.auth import router as auth_router
from photocatalog.web.routers.catalog import router as catalog_router
from photocatalog.web.routers.photos import router as photos_router

__all__ = [
    "assets_router",
    "auth_router",
    "catalog_router",
    "photos_router",
]
