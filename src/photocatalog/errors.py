from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class UserNotAuthorizedError(UserError):
    """Raised when the session credential is missing or invalid."""

    def __init__(self, message: str = "user not authorized") -> None:
        super().__init__(message)


class UserNotAllowedError(UserError):
    """Raised when a valid credential carries no allow-listed email."""

    def __init__(self, message: str = "user not allowed") -> None:
        super().__init__(message)


class NotFoundError(UserError):
    """Raised when a requested object is not found."""

    def __init__(self, message: str = "Object not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ServerError(ABC, Exception):
    """Base class for server-side failures.

    Messages of these errors are logged but never shown to the user.
    """


class AuthorizeError(ServerError):
    """Raised on identity provider or token minting anomalies."""

    def __init__(self, message: str = "unexpected error while authorizing") -> None:
        super().__init__(message)


class StorageError(ServerError):
    """Raised when an object store operation fails."""
