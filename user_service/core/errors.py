"""Error types for the user service.

Defines a small hierarchy of exceptions raised by the service layer to signal
missing users and uniqueness violations. The server maps them to HTTP status
codes in ``user_service.server.exception_handlers``.
"""

from __future__ import annotations


class UserServiceError(Exception):
    """Base error for all user service exceptions."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundEntityError(UserServiceError):
    """Raised when a requested entity does not exist."""


class NotUniqueEntityError(UserServiceError):
    """Raised when creating or updating an entity would break a uniqueness rule."""
