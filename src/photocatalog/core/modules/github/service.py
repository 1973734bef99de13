import secrets
from urllib.parse import urlencode

import httpx
import structlog
from pydantic import TypeAdapter

from photocatalog.core.core import Service
from photocatalog.core.modules.github.models import AuthorizationRequest, GitHubEmail
from photocatalog.core.modules.session.models import SessionToken
from photocatalog.errors import AuthorizeError

logger = structlog.get_logger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"  # noqa: S105
GITHUB_EMAILS_URL = "https://api.github.com/user/emails"
GITHUB_SCOPE = "user:email"
GITHUB_API_VERSION = "2022-11-28"

_emails_adapter = TypeAdapter(list[GitHubEmail])


def select_emails(emails: list[GitHubEmail]) -> tuple[str, list[str]]:
    """Pick the primary email and collect all verified ones.

    The first entry marked primary wins; without one, the first verified
    email is used. At least one verified email is required.
    """
    primary_email: str | None = None
    verified_emails: list[str] = []
    for entry in emails:
        if entry.primary and primary_email is None:
            primary_email = entry.email
        if entry.verified:
            verified_emails.append(entry.email)
    if not verified_emails:
        raise AuthorizeError("no verified email")
    return primary_email or verified_emails[0], verified_emails


def verify_state(expected: str | None, received: str | None) -> None:
    """Compare the anti-forgery token stored at login start with the one returned."""
    if not expected or not received or not secrets.compare_digest(expected, received):
        raise AuthorizeError("OAuth state mismatch")


class GitHubService(Service):
    """GitHub OAuth login: authorize redirect, code exchange, email lookup."""

    @property
    def _http(self) -> httpx.AsyncClient:
        return self.core.http_client

    def callback_url(self, redirect: str | None = None) -> str:
        url = f"{self.core.config.public_url}/auth/authorized"
        if redirect:
            url += "?" + urlencode({"redirect": redirect})
        return url

    def authorization_request(self, redirect: str | None = None) -> AuthorizationRequest:
        """Build the GitHub authorize URL, remembering the post-login redirect."""
        state = secrets.token_urlsafe(16)
        params = {
            "response_type": "code",
            "client_id": self.core.config.github_client_id,
            "redirect_uri": self.callback_url(redirect),
            "scope": GITHUB_SCOPE,
            "state": state,
        }
        return AuthorizationRequest(url=f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}", state=state)

    async def login(self, code: str, redirect: str | None = None) -> SessionToken:
        """Complete the OAuth callback and mint a session token.

        Any failure talking to GitHub becomes AuthorizeError; the
        details are logged only.
        """
        try:
            access_token = await self.exchange_code(code, redirect)
            emails = await self.fetch_emails(access_token)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("GitHub login failed", error=str(e))
            raise AuthorizeError from e

        primary_email, verified_emails = select_emails(emails)
        logger.info("User logged in", primary_email=primary_email)
        return self.core.services.session.mint(primary_email, verified_emails)

    async def exchange_code(self, code: str, redirect: str | None = None) -> str:
        response = await self._http.post(
            GITHUB_TOKEN_URL,
            data={
                "client_id": self.core.config.github_client_id,
                "client_secret": self.core.config.github_client_secret,
                "code": code,
                "redirect_uri": self.callback_url(redirect),
            },
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        # GitHub reports a bad code with 200 and an "error" field
        payload = response.json()
        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("token response without access_token")
        return access_token

    async def fetch_emails(self, access_token: str) -> list[GitHubEmail]:
        response = await self._http.get(
            GITHUB_EMAILS_URL,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )
        response.raise_for_status()
        return _emails_adapter.validate_python(response.json())
