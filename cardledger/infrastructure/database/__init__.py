"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    Base,
    UserModel,
    CategoryModel,
    AccountModel,
    GoalModel,
    CreditCardModel,
    TransactionModel,
    CreditCardPurchaseModel,
    CreditCardBillModel,
)
from . import guards  # noqa: F401  registers the transactions insert guard
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "UserModel",
    "CategoryModel",
    "AccountModel",
    "GoalModel",
    "CreditCardModel",
    "TransactionModel",
    "CreditCardPurchaseModel",
    "CreditCardBillModel",
    "SqlAlchemyUnitOfWork",
]
