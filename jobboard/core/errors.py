"""
Application error types.

Each error carries the HTTP status it maps to. The exception handlers
registered in main.py render them as {"error": {"message", "status"}}.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = 500

    def __init__(self, message: Any = "Internal server error", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Malformed or empty input (400)."""

    status_code = 400

    def __init__(self, message: Any = "Bad Request"):
        super().__init__(message)


class NotFoundError(AppError):
    """No matching row (404)."""

    status_code = 404

    def __init__(self, message: Any = "Not Found"):
        super().__init__(message)


class UnauthorizedError(AppError):
    """Missing, invalid or insufficient credentials (401)."""

    status_code = 401

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)
