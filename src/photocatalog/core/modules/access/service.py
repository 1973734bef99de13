from collections.abc import Sequence

from starlette.requests import cookie_parser

from photocatalog.core.core import Service
from photocatalog.core.modules.session.models import SESSION_COOKIE_NAME, Identity, SessionToken
from photocatalog.errors import AuthorizeError, UserNotAllowedError, UserNotAuthorizedError


def extract_session_token(cookie_headers: Sequence[str]) -> SessionToken:
    """Read the session cookie out of the raw Cookie header values.

    Raises:
        UserNotAuthorizedError: No Cookie header or no session cookie
        AuthorizeError: A Cookie header holds bytes that are not visible ASCII
    """
    if not cookie_headers:
        raise UserNotAuthorizedError
    for header in cookie_headers:
        if not (header.isascii() and header.isprintable()):
            raise AuthorizeError("Malformed cookie header")
    cookies = cookie_parser("; ".join(cookie_headers))
    token = cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise UserNotAuthorizedError
    return SessionToken(token)


class AccessService(Service):
    def ensure_allowed(self, identity: Identity) -> Identity:
        """Ensure at least one verified email of the identity is allow-listed."""
        allowed_emails = set(self.core.config.allowed_emails)
        if not allowed_emails.intersection(identity.emails):
            raise UserNotAllowedError
        return identity

    def ensure_authenticated(self, cookie_headers: Sequence[str]) -> Identity:
        """Run the full gate: cookie extraction, token verification, allow-list."""
        token = extract_session_token(cookie_headers)
        identity = self.core.services.session.verify(token)
        return self.ensure_allowed(identity)
