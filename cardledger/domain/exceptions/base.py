"""Base domain exception."""

from typing import Optional


class DomainException(Exception):
    """
    Base exception for card ledger errors.

    ``code`` is a stable machine-readable identifier returned to API
    clients; ``details`` optionally carries the underlying cause.
    """

    def __init__(
        self,
        message: str,
        code: str = "DOMAIN_ERROR",
        details: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body
