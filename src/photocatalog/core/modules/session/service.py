from datetime import timedelta
from typing import Any

import jwt
import pydantic
import structlog

from photocatalog.core.core import Service
from photocatalog.core.modules.session.models import Identity, SessionToken
from photocatalog.errors import AuthorizeError, UserNotAuthorizedError
from photocatalog.utils import now

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "HS256"


class SessionService(Service):
    """Mints and verifies self-contained signed session tokens.

    There is no session table, so a token cannot be revoked before it expires.
    """

    @property
    def _secret(self) -> str:
        return self.core.config.jwt_secret

    def mint(self, primary_email: str, emails: list[str]) -> SessionToken:
        """Sign an identity that expires session_ttl_hours from now."""
        expires_at = now() + timedelta(hours=self.core.config.session_ttl_hours)
        identity = Identity(primary_email=primary_email, emails=emails, expires_at=expires_at)
        try:
            token = jwt.encode(identity.to_claims(), self._secret, algorithm=JWT_ALGORITHM)
        except (jwt.PyJWTError, TypeError) as e:
            logger.exception("Failed to sign session token")
            raise AuthorizeError from e
        return SessionToken(token)

    def verify(self, token: str) -> Identity:
        """Check signature and expiration, then decode the identity."""
        try:
            claims: dict[str, Any] = jwt.decode(
                token, self._secret, algorithms=[JWT_ALGORITHM], options={"require": ["exp"]}
            )
        except jwt.PyJWTError as e:
            logger.debug("Rejected session token", reason=str(e))
            raise UserNotAuthorizedError("Invalid or expired session") from e

        try:
            return Identity.from_claims(claims)
        except (KeyError, TypeError, ValueError, pydantic.ValidationError) as e:
            logger.debug("Rejected session token with malformed claims", reason=str(e))
            raise UserNotAuthorizedError("Invalid or expired session") from e
