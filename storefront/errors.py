"""Application error taxonomy.

Services raise these; the API layer maps each one to its HTTP status and a
``{"error": ..., "message": ...}`` body (see ``storefront.api.error_handlers``).
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors with a stable HTTP mapping."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str, *, error: str | None = None, detail: str | None = None):
        self.message = message
        if error is not None:
            self.error = error
        # Internal detail, only exposed in development
        self.detail = detail
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class ConflictError(AppError):
    """Duplicate resource."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class AuthError(AppError):
    """Bad credentials or missing session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Authentication Error"


class ForbiddenError(AppError):
    """Authenticated but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFoundError(AppError):
    """Resource not found."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class InternalError(AppError):
    """Persistence or session store failure."""
