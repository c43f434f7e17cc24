from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class AuthenticationError(UserError):
    """Raised when a request carries no valid session token or bad credentials."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class UpstreamUnavailableError(Exception):
    """Raised when the database does not answer in time or the connection is lost."""

    def __init__(self, message: str = "Upstream service unavailable") -> None:
        super().__init__(message)


class TokenSpaceExhaustedError(Exception):
    """Raised when no unused session token could be drawn."""
