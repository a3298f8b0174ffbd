"""
Error taxonomy shared by the store, the auth layer and the HTTP handlers.

Every error carries the HTTP status it maps to and a ``detail`` string that
is safe to show to clients.  The exception handlers in ``api.middleware``
turn them into JSON responses.
"""

from __future__ import annotations

from enum import Enum


class ServiceError(Exception):
    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ConfigurationError(ServiceError):
    """Raised at startup when required settings are missing."""

    detail = "Server misconfigured"


class ValidationError(ServiceError):
    status_code = 400
    detail = "Invalid request"


class AuthErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_CREDENTIALS = "invalid_credentials"


class AuthError(ServiceError):
    status_code = 401
    detail = "Unauthorized"

    def __init__(
        self,
        kind: AuthErrorKind = AuthErrorKind.UNAUTHENTICATED,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        if detail is None and kind is AuthErrorKind.INVALID_CREDENTIALS:
            detail = "Invalid credentials"
        super().__init__(detail)


class DuplicateUsernameError(ServiceError):
    status_code = 409
    detail = "Username already exists"


class NotFoundError(ServiceError):
    status_code = 404
    detail = "Not found"


class HashError(ServiceError):
    detail = "Error hashing password"


class StoreError(ServiceError):
    detail = "Storage error"
