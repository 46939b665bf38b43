"""Domain Entities - Core business objects."""

from .transaction import Transaction, TransactionType, FlaggedTransaction
from .purchase import Purchase
from .card import Card, BillStatus
from .repair import MigrationOutcome, RepairResult
from .profile import User, Category, Account, Goal

__all__ = [
    "Transaction",
    "TransactionType",
    "FlaggedTransaction",
    "Purchase",
    "Card",
    "BillStatus",
    "MigrationOutcome",
    "RepairResult",
    "User",
    "Category",
    "Account",
    "Goal",
]
