"""Exceptions raised by the service layer.

Routes translate these into flashed messages (HTML) or JSON error bodies
(API). Permission failures use the builtin ``PermissionError``.
"""
from typing import Optional


class BlogError(Exception):
    """Base exception for expected service failures."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidDataError(BlogError):
    """Submitted data failed validation."""


class DuplicateError(BlogError):
    """A unique name or slug is already taken."""


class InUseError(BlogError):
    """The record is still referenced and cannot be deleted."""


class NotFoundError(BlogError):
    """The requested record does not exist or is hidden from the viewer."""

    status_code = 404


def status_for(error: Exception) -> int:
    """HTTP status for a service exception."""
    if isinstance(error, PermissionError):
        return 403
    return getattr(error, "status_code", 500)
