from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3001
    debug: bool = False
    static_file_directory: str = "../frontend/build"  # Built frontend served at /, skipped if missing
    allowed_emails: Annotated[list[str], NoDecode] = []  # Comma-separated, e.g. a@x.com,b@y.com
    github_client_id: str
    github_client_secret: str
    public_url: str  # Public base URL of this service, e.g. https://photos.example.com
    jwt_secret: str  # Secret for signing session tokens
    bucket_name: str  # Object store bucket holding photo/ and metadata/ keys
    gcs_project: str | None = None  # Falls back to the project from default credentials
    default_page_size: int = 24
    session_ttl_hours: int = 24

    model_config = {
        "env_file": [".env"],
        "env_prefix": "PHOTOCATALOG_",
        "extra": "ignore",
    }

    @field_validator("allowed_emails", mode="before")
    @classmethod
    def split_allowed_emails(cls, value: object) -> object:
        if isinstance(value, str):
            return [email.strip() for email in value.split(",") if email.strip()]
        return value

    @field_validator("public_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
