"""Tests for configuration loading."""

import pytest

from photocatalog.config import Config

REQUIRED = {
    "PHOTOCATALOG_GITHUB_CLIENT_ID": "client-id",
    "PHOTOCATALOG_GITHUB_CLIENT_SECRET": "client-secret",
    "PHOTOCATALOG_PUBLIC_URL": "https://photos.example.com/",
    "PHOTOCATALOG_JWT_SECRET": "secret",
    "PHOTOCATALOG_BUCKET_NAME": "bucket",
}


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key, value in REQUIRED.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


class TestConfig:
    """Tests for Config."""

    def test_defaults(self, env):
        """Test default values when only required settings are present."""
        config = Config()

        assert config.port == 3001
        assert config.allowed_emails == []
        assert config.default_page_size == 24
        assert config.session_ttl_hours == 24
        assert config.gcs_project is None

    def test_allowed_emails_comma_separated(self, env):
        """Test that the allow-list is read as a comma-separated list."""
        env.setenv("PHOTOCATALOG_ALLOWED_EMAILS", "a@x.com, b@y.com,,")

        assert Config().allowed_emails == ["a@x.com", "b@y.com"]

    def test_public_url_trailing_slash_stripped(self, env):
        """Test that the public URL is normalized."""
        assert Config().public_url == "https://photos.example.com"

    def test_missing_required(self, monkeypatch, tmp_path):
        """Test that required settings must be provided."""
        monkeypatch.chdir(tmp_path)
        for key in REQUIRED:
            monkeypatch.delenv(key, raising=False)

        with pytest.raises(ValueError):
            Config()
