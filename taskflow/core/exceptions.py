"""
Error taxonomy shared by every service.

Services raise these; the handlers registered in taskflow.main turn them into
``{"error": <message>}`` bodies with the matching status code.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or empty required field."""
    status_code = 400


class ConflictError(AppError):
    """Request would break a membership invariant (e.g. creator leaving a populated group)."""
    status_code = 400


class AuthError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class StoreError(AppError):
    """Unexpected persistence failure."""
    status_code = 500
