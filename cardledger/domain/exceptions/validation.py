"""Request validation exceptions."""

from .base import DomainException


class ValidationException(DomainException):
    """Raised when request fields are missing or invalid."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class InvalidTransactionRequestException(ValidationException):
    """Raised when a transaction creation request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSACTION_REQUEST",
        )


class InvalidRepairActionException(ValidationException):
    """Raised when the repair endpoint receives an unknown action."""

    def __init__(self, action: str | None):
        super().__init__(
            message=f"Invalid action: {action}",
            code="INVALID_ACTION",
        )
        self.action = action


class CategoryNotResolvedException(ValidationException):
    """Raised when no category was given and no default exists."""

    def __init__(self, user_id: str, transaction_type: str):
        super().__init__(
            message=f"No category could be resolved for a {transaction_type} of user {user_id}",
            code="CATEGORY_NOT_RESOLVED",
        )
        self.user_id = user_id
