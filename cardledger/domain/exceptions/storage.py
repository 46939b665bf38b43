"""Persistence layer exceptions."""

from .base import DomainException


class StorageException(DomainException):
    """Raised when the persistence layer fails unexpectedly."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            details=details,
        )
