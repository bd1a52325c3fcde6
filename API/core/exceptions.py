"""
Application error taxonomy.

Services raise these; the handlers registered in app.py turn every one of
them into a JSON body of the form {"error": "<message>"}.
"""

from fastapi import status


class AppError(Exception):
    """Base class for all expected API failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid required field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class ForbiddenError(AuthError):
    """Authenticated, but the role is not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Unique constraint violation, reported as a bad request."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Record already exists"


class InternalError(AppError):
    pass
