"""
Module: errors.py
Description: Domain error hierarchy for the Kefir Tracker API.

Services raise these errors without any HTTP vocabulary; the exception
handlers registered in main.py are the only place that turns them into
status codes and response bodies.

Key Components:
- AppError: Base error carrying a status code and machine-readable code
- NotFoundError / ForbiddenError / BadRequestError / UnauthorizedError
- ItemNotFoundError: Storage-level miss on an update of an absent key
- SchedulingError: External scheduler refused to register a reminder

Author: Kefir Tracker Team
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto a client-visible status code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error", status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class BadRequestError(AppError):
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class ItemNotFoundError(NotFoundError):
    """Raised by the entity store when an update targets a key that does not exist."""

    def __init__(self, pk: str, sk: str):
        super().__init__("Resource not found")
        self.pk = pk
        self.sk = sk


class SchedulingError(AppError):
    """Raised when the external scheduler fails to register a reminder."""

    status_code = 500
    code = "SCHEDULING_FAILED"

    def __init__(self, message: str = "Failed to schedule reminder"):
        super().__init__(message)
