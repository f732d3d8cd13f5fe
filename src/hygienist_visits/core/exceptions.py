from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str, *, code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class ConflictError(DomainError):
    """Raised on duplicate external codes or deletes blocked by references."""

    code = "CONFLICT"
    status_code = 409


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "INVALID_CREDENTIALS"
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    status_code = 403


class DataIntegrityError(DomainError):
    """Raised when stored data is malformed (e.g. an unknown status value)."""

    code = "DATA_INTEGRITY_ERROR"
    status_code = 500
