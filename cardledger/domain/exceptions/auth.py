"""Authentication and authorization exceptions."""

from .base import DomainException


class AuthenticationException(DomainException):
    """Raised when credentials are missing or invalid."""

    def __init__(self, message: str = "Authorization header required"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
        )


class AuthorizationException(DomainException):
    """Raised when an authenticated caller lacks a required privilege."""

    def __init__(self, message: str = "Admin access required", code: str = "FORBIDDEN"):
        super().__init__(message=message, code=code)


class CardOwnershipException(AuthorizationException):
    """Raised when a credit card does not belong to the requesting user."""

    def __init__(self, card_id: str, user_id: str):
        super().__init__(
            message=f"Credit card {card_id} does not belong to user {user_id}",
            code="CARD_OWNERSHIP_MISMATCH",
        )
        self.card_id = card_id
        self.user_id = user_id
