from typing import Annotated, cast

from fastapi import Depends, Query, Request

from photocatalog.app import App
from photocatalog.core.modules.session.models import Identity
from photocatalog.core.pagination import PageParams


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_identity(request: Request, app: Annotated[App, Depends(get_app)]) -> Identity:
    """Authenticate the request from its session cookie before the handler runs."""
    return app.authenticate(request.headers.getlist("cookie"))


async def get_page_params(
    app: Annotated[App, Depends(get_app)],
    page: Annotated[int, Query(ge=0, description="Zero-based page number")] = 0,
    page_size: Annotated[int | None, Query(alias="pageSize", ge=1, description="Maximum items per page")] = None,
) -> PageParams:
    return PageParams(page=page, page_size=page_size or app.config.default_page_size)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
IdentityDep = Annotated[Identity, Depends(get_identity)]
PageParamsDep = Annotated[PageParams, Depends(get_page_params)]
