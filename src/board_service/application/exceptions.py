"""Application errors.

Each error knows how it surfaces: ``status_code`` for HTTP responses and
``code`` for error frames on the live feed.
"""
from __future__ import annotations


class AppError(Exception):
    status_code = 500
    code = "server_error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ForbiddenError(AppError):
    """Caller's role does not allow the operation."""

    status_code = 403
    code = "forbidden"


class UnauthorizedError(AppError):
    """Caller is an admin but does not own the target message."""

    status_code = 401
    code = "unauthorized"


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"


class ServerError(AppError):
    """Storage or infrastructure failure. Detail is safe to show to clients."""
