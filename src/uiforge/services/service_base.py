"""Exceptions raised by the service layer.

Services never build HTTP responses; they raise one of these and the error
handlers pick the status by class (``uiforge.utils.errors``).
"""
from __future__ import annotations

__all__ = [
    'ServiceError', 'NotFoundError', 'ValidationError', 'ConflictError',
    'DuplicateEmailError', 'DuplicateUsernameError', 'AuthenticationError',
]


class ServiceError(Exception):
    """Root of the service exception tree."""


class NotFoundError(ServiceError):
    """The requested record does not exist."""


class ValidationError(ServiceError):
    """Input rejected by a service rule."""


class ConflictError(ServiceError):
    """The change would violate a uniqueness rule."""


class DuplicateEmailError(ConflictError):
    """A user with this email already exists."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message)


class DuplicateUsernameError(ConflictError):
    """A user with this username already exists."""

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class AuthenticationError(ServiceError):
    """Credentials did not match."""
