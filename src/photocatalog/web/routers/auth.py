from typing import Annotated

from fastapi import APIRouter, Cookie, Query
from fastapi.responses import RedirectResponse

from photocatalog.core.modules.session.models import SESSION_COOKIE_NAME
from photocatalog.utils import is_local_path
from photocatalog.web.deps import AppDep
from photocatalog.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])

OAUTH_STATE_COOKIE_NAME = "OAUTH_STATE"
OAUTH_STATE_MAX_AGE = 10 * 60


@router.get(
    "/github",
    summary="Start GitHub login",
    description="Redirect to GitHub to authorize email access. `redirect` is where to land after login.",
    operation_id="loginWithGitHub",
    response_class=RedirectResponse,
    status_code=303,
)
async def login_with_github(
    app: AppDep, redirect: Annotated[str | None, Query(description="Local path to return to")] = None
) -> RedirectResponse:
    authorization = app.start_login(redirect)
    response = RedirectResponse(authorization.url, status_code=303)
    response.set_cookie(
        key=OAUTH_STATE_COOKIE_NAME,
        value=authorization.state,
        max_age=OAUTH_STATE_MAX_AGE,
        path="/auth",
        httponly=True,
        samesite="lax",
    )
    return response


@router.get(
    "/authorized",
    summary="GitHub login callback",
    description="Exchange the GitHub code, set the session cookie and redirect back.",
    operation_id="githubAuthorized",
    response_class=RedirectResponse,
    status_code=303,
    responses={
        500: {"model": ErrorResponse, "description": "GitHub authorization failed"},
    },
)
async def github_authorized(
    app: AppDep,
    code: Annotated[str, Query(description="Authorization code from GitHub")],
    state: Annotated[str | None, Query(description="Anti-forgery token from GitHub")] = None,
    redirect: Annotated[str | None, Query(description="Local path to return to")] = None,
    oauth_state: Annotated[str | None, Cookie(alias=OAUTH_STATE_COOKIE_NAME)] = None,
) -> RedirectResponse:
    token = await app.complete_login(code, redirect, oauth_state, state)
    target = redirect if redirect and is_local_path(redirect) else "/"

    response = RedirectResponse(target, status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=app.config.session_ttl_hours * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
    )
    response.delete_cookie(OAUTH_STATE_COOKIE_NAME, path="/auth")
    return response


@router.get(
    "/logout",
    summary="Log out",
    description=(
        "Clear the session cookie and redirect to the site root. "
        "Sessions are stateless, so an already issued token stays valid until it expires."
    ),
    operation_id="logout",
    response_class=RedirectResponse,
    status_code=303,
)
async def logout() -> RedirectResponse:
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return response
