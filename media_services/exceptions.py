"""
Media Services exception hierarchy.

All exceptions inherit from MediaServicesError for easy catching.
"""

from typing import Any


class MediaServicesError(Exception):
    """Base exception for all media_services errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class AuthenticationError(MediaServicesError):
    """Authentication failed."""


class InvalidCredentialsError(AuthenticationError):
    """The access control service rejected the account name or key."""


class APIError(MediaServicesError):
    """API request failed."""

    def __init__(self, message: str, *, code: int, endpoint: str | None = None) -> None:
        super().__init__(message, code=code, endpoint=endpoint)
        self.code = code
        self.endpoint = endpoint


class NotFoundError(APIError):
    """Entity not found."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, code=404, endpoint=endpoint)


class UnauthorizedError(APIError, AuthenticationError):
    """The data service rejected the bearer token (401)."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, code=401, endpoint=endpoint)


class ServerError(APIError):
    """Server-side error (5xx)."""

    def __init__(self, message: str, *, code: int = 500, endpoint: str | None = None) -> None:
        super().__init__(message, code=code, endpoint=endpoint)


class NetworkError(MediaServicesError):
    """Network-level error (connection failed, timeout)."""


class UnexpectedResponseError(MediaServicesError):
    """The service answered with a payload the client cannot interpret."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, endpoint=endpoint)
        self.endpoint = endpoint


class ValidationError(MediaServicesError):
    """Entity is not in a valid state for the requested operation."""
