"""Exceptions raised while repairing misfiled credit-card transactions."""

from .base import DomainException


class RowMigrationException(DomainException):
    """Raised when a single flagged transaction could not be migrated."""

    def __init__(self, transaction_id: str, reason: str):
        super().__init__(
            message=f"Error processing transaction {transaction_id}: {reason}",
            code="ROW_MIGRATION_FAILED",
        )
        self.transaction_id = transaction_id
        self.reason = reason


class DependencyException(DomainException):
    """Raised when bill generation or limit recalculation fails."""

    def __init__(self, dependency: str, card_id: str, reason: str):
        super().__init__(
            message=f"{dependency} failed for card {card_id}: {reason}",
            code="DEPENDENCY_ERROR",
        )
        self.dependency = dependency
        self.card_id = card_id
