# storefront/core/errors.py
"""
Service error taxonomy.
Every error carries the HTTP status and a message that is safe to show
to the client; internal details stay in the logs.
"""


class ServiceError(Exception):
    """Base error for all service operations."""

    status_code = 500
    message = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400
    message = "invalid request"


class ConflictError(ServiceError):
    """Unique value already taken."""

    status_code = 409
    message = "email already registered"


class InvalidCredentials(ServiceError):
    """Login failed. Same error for unknown email and wrong password."""

    status_code = 401
    message = "invalid credentials"


class Unauthenticated(ServiceError):
    """Missing, unknown or expired session on a protected operation."""

    status_code = 401
    message = "not authenticated"


class InternalError(ServiceError):
    status_code = 500
    message = "internal server error"


class StorageError(InternalError):
    pass
