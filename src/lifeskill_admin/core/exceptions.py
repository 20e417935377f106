from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the error handler answers with.
    """

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a trainer, visit, school or other record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a write would duplicate an existing record."""

    status_code = 409


class DuplicateRecordError(ConflictError):
    """Raised by repositories when the database rejects a duplicate key."""

    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class NotificationError(DomainError):
    """Raised when a push notification could not be delivered."""

    status_code = 502
