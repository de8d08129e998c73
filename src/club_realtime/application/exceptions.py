"""Errors raised by the domain services; the app factory maps ``status_code`` onto the HTTP response."""
from __future__ import annotations

from typing import ClassVar


class AppError(Exception):
    status_code: ClassVar[int] = 500

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class ValidationError(AppError):
    """Rejected input that passed schema validation (empty text, unknown recipient)."""

    status_code = 400
