from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateApplicationError(ValidationError):
    """Raised when a submission collides with an existing application."""

    status_code = 409


class NotFoundError(DomainError):
    """Raised when no record exists for an identifier."""

    status_code = 404


class InvalidTransitionError(DomainError):
    """Raised when an attendance transition is not allowed from the current state.

    ``field``/``timestamp`` carry the already-stored value (if any) so callers can show it.
    """

    def __init__(self, message: str, *, field: Optional[str] = None, timestamp: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.timestamp = timestamp


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are invalid."""

    status_code = 401


class StorageFailure(DomainError):
    """Raised when the underlying store fails to read or write."""

    status_code = 500
