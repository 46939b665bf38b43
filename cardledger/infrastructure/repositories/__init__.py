"""Repository implementations."""

from .transaction_repository import PostgresTransactionRepository
from .purchase_repository import PostgresPurchaseRepository
from .card_repository import PostgresCardRepository
from .profile_repository import (
    PostgresUserRepository,
    PostgresCategoryRepository,
    PostgresAccountRepository,
    PostgresGoalRepository,
)

__all__ = [
    "PostgresTransactionRepository",
    "PostgresPurchaseRepository",
    "PostgresCardRepository",
    "PostgresUserRepository",
    "PostgresCategoryRepository",
    "PostgresAccountRepository",
    "PostgresGoalRepository",
]
