"""
Domain Interfaces (Ports)
"""

from .repositories import (
    TransactionRepository,
    PurchaseRepository,
    CardRepository,
    UserRepository,
    CategoryRepository,
    AccountRepository,
    GoalRepository,
    UnitOfWork,
)
from .billing import BillGenerator, LimitRecalculator

__all__ = [
    "TransactionRepository",
    "PurchaseRepository",
    "CardRepository",
    "UserRepository",
    "CategoryRepository",
    "AccountRepository",
    "GoalRepository",
    "UnitOfWork",
    "BillGenerator",
    "LimitRecalculator",
]
