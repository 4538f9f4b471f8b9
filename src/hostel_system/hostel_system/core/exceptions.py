from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class FieldIssue:
    field: str
    message: str


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400

    def __init__(self, message: str = "Invalid input", errors: Sequence[FieldIssue] = ()):
        super().__init__(message)
        self.errors = list(errors)


class AuthenticationError(DomainError):
    """Raised when the request carries no valid session."""

    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid or the account is disabled."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Raised on uniqueness or invariant violations (duplicate keys, double allocation)."""

    status_code = 409
