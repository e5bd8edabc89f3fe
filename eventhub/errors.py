"""Service-level error taxonomy.

Each error carries the HTTP status it maps to; ``eventhub.main`` turns any
``ServiceError`` into a ``{"error": message}`` JSON response.
"""

from typing import Optional


class ServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400


class PolicyError(ValidationError):
    """Password rejected by the strength policy."""


class ConflictError(ServiceError):
    """Duplicate unique value (e.g. an email that is already registered)."""

    status_code = 400


class AuthError(ServiceError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401


class NotFoundError(ServiceError):
    """No matching record owned by the requester."""

    status_code = 404


class InternalError(ServiceError):
    status_code = 500


__all__ = [
    "ServiceError",
    "ValidationError",
    "PolicyError",
    "ConflictError",
    "AuthError",
    "NotFoundError",
    "InternalError",
]
