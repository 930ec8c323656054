# File: todo_portal/core/errors.py

"""
Failure kinds raised by the services and repositories.

Route handlers never build error responses themselves. Each kind carries the
HTTP status and the short ``error`` label it is reported with; the exception
handlers in ``todo_portal.main`` turn them into ``{"error", "message"}`` bodies.
"""

from typing import Optional

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidError(ServiceError):
    """Malformed input or a failed validation rule (short password, bad enum...)."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"
    default_message = "Invalid request"


class UnauthenticatedError(ServiceError):
    """Missing, expired, revoked or invalid token, or the user no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    default_message = "Authentication required or invalid token"


class UnauthorizedError(ServiceError):
    """
    Credential mismatch inside an already authenticated session
    (e.g. wrong current password). Reported as 403 so clients do not
    treat it as a dead session.
    """

    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    default_message = "Invalid password"


class NotFoundError(ServiceError):
    """Entity absent, or present but owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"
    default_message = "The requested resource was not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"
    default_message = "User with this email already exists"
