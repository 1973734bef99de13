from pydantic import BaseModel, Field


class GitHubEmail(BaseModel):
    """One entry of the GitHub "list emails for the authenticated user" response."""

    email: str
    verified: bool
    primary: bool


class AuthorizationRequest(BaseModel):
    """Where to send the browser to start a GitHub login."""

    url: str = Field(..., description="GitHub authorize URL")
    state: str = Field(..., description="Anti-forgery token echoed back by GitHub")
