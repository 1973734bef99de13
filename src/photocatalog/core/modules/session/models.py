"""Session credential models."""

from datetime import UTC, datetime
from typing import Any, NewType, Self

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "SESSION"


class Identity(BaseModel):
    """Authenticated user as carried inside the signed session token.

    Never stored server side; dead once the signature fails or expires_at passes.
    """

    primary_email: str = Field(..., description="Primary email reported by GitHub")
    emails: list[str] = Field(..., min_length=1, description="All verified emails")
    expires_at: AwareDatetime = Field(..., description="Session expiration time")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_claims(self) -> dict[str, Any]:
        return {"primaryEmail": self.primary_email, "emails": self.emails, "exp": self.expires_at}

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Self:
        return cls(
            primary_email=claims["primaryEmail"],
            emails=claims["emails"],
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
