"""Tests for the session cookie and allow-list gate."""

from datetime import UTC, datetime, timedelta

import pytest

from photocatalog.core.modules.access.service import extract_session_token
from photocatalog.core.modules.session.models import Identity
from photocatalog.errors import AuthorizeError, UserNotAllowedError, UserNotAuthorizedError

ALLOWED = "alice@example.com"


def make_identity(*emails: str) -> Identity:
    return Identity(
        primary_email=emails[0], emails=list(emails), expires_at=datetime.now(UTC) + timedelta(hours=1)
    )


class TestExtractSessionToken:
    """Tests for reading the session cookie from Cookie headers."""

    def test_single_cookie(self):
        """Test the common case of one header with the session cookie."""
        assert extract_session_token(["SESSION=abc.def.ghi"]) == "abc.def.ghi"

    def test_among_other_cookies(self):
        """Test that other cookies are ignored."""
        assert extract_session_token(["theme=dark; SESSION=tok; lang=en"]) == "tok"

    def test_across_multiple_headers(self):
        """Test that every Cookie header is considered."""
        assert extract_session_token(["theme=dark", "SESSION=tok"]) == "tok"

    def test_no_header(self):
        """Test that a request without cookies is not authorized."""
        with pytest.raises(UserNotAuthorizedError):
            extract_session_token([])

    def test_no_session_cookie(self):
        """Test that other cookies alone are not enough."""
        with pytest.raises(UserNotAuthorizedError):
            extract_session_token(["theme=dark"])

    def test_empty_session_cookie(self):
        """Test that a cleared session cookie is not authorized."""
        with pytest.raises(UserNotAuthorizedError):
            extract_session_token(['SESSION=""'])

    @pytest.mark.parametrize("header", ["SESSION=café", "SESSION=a\x00b", "SESSION=tok\n"])
    def test_malformed_header(self, header):
        """Test that non-printable or non-ASCII headers are a server-side anomaly."""
        with pytest.raises(AuthorizeError):
            extract_session_token([header])


class TestEnsureAllowed:
    """Tests for the allow-list check."""

    def test_allowed_primary(self, core):
        """Test that an allow-listed email passes."""
        identity = make_identity(ALLOWED)

        assert core.services.access.ensure_allowed(identity) is identity

    def test_any_verified_email_suffices(self, core):
        """Test that a secondary verified email on the list passes."""
        identity = make_identity("work@corp.example", ALLOWED)

        assert core.services.access.ensure_allowed(identity) is identity

    def test_not_allowed(self, core):
        """Test that identities without an allow-listed email are refused."""
        with pytest.raises(UserNotAllowedError):
            core.services.access.ensure_allowed(make_identity("mallory@example.com"))

    def test_empty_allow_list_refuses_everyone(self, core, config):
        """Test that an empty allow-list refuses every identity."""
        config.allowed_emails = []

        with pytest.raises(UserNotAllowedError):
            core.services.access.ensure_allowed(make_identity(ALLOWED))

    def test_comparison_is_exact(self, core):
        """Test that emails are compared as-is."""
        with pytest.raises(UserNotAllowedError):
            core.services.access.ensure_allowed(make_identity("Alice@Example.com"))


class TestEnsureAuthenticated:
    """Tests for the full gate."""

    def test_valid_cookie(self, core, session_token):
        """Test that a valid session for an allowed user yields the identity."""
        identity = core.services.access.ensure_authenticated([f"SESSION={session_token}"])

        assert identity.primary_email == ALLOWED

    def test_invalid_token(self, core):
        """Test that a bad token is not authorized."""
        with pytest.raises(UserNotAuthorizedError):
            core.services.access.ensure_authenticated(["SESSION=garbage"])

    def test_valid_token_not_allowed(self, core):
        """Test that authentication and allow-listing are distinct outcomes."""
        token = core.services.session.mint("mallory@example.com", ["mallory@example.com"])

        with pytest.raises(UserNotAllowedError):
            core.services.access.ensure_authenticated([f"SESSION={token}"])
