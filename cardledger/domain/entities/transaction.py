"""Transaction entity representing a ledger entry."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4


class TransactionType(str, Enum):
    """Type of ledger entry."""

    INCOME = "income"  # Money in (salary, refunds, transfers in)
    EXPENSE = "expense"  # Money out (purchases, bills, payments)


@dataclass
class Transaction:
    """
    A ledger entry stored in the generic transactions table.

    Attributes:
        user_id: Owner of the entry
        type: Whether this is an income or an expense
        amount: Positive amount of the entry
        date: Date the entry happened
        description: Human-readable description
        category_id: Optional category
        account_id: Optional account the entry belongs to
        credit_card_id: Card the entry was paid with, if any
        goal_id: Savings goal an income contributes to, if any
    """

    user_id: str
    type: TransactionType
    amount: Decimal
    date: date
    description: str = ""
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    credit_card_id: Optional[str] = None
    goal_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_credit_card_expense(self) -> bool:
        """Check if this entry should have been a credit-card purchase."""
        return self.is_expense and self.credit_card_id is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type.value,
            "amount": float(self.amount),
            "date": self.date.isoformat(),
            "description": self.description,
            "category_id": self.category_id,
            "account_id": self.account_id,
            "credit_card_id": self.credit_card_id,
            "goal_id": self.goal_id,
            "created_at": self.created_at.isoformat() + "Z",
        }


@dataclass(frozen=True)
class FlaggedTransaction:
    """
    A credit-card expense found in the transactions table without a
    matching purchase.

    Carries the owning card's name and owner so it can be reported
    without further lookups.
    """

    transaction: Transaction
    card_name: str
    card_user_id: str

    @property
    def id(self) -> str:
        return self.transaction.id

    @property
    def credit_card_id(self) -> str:
        return self.transaction.credit_card_id

    def to_dict(self) -> dict:
        return {
            "id": self.transaction.id,
            "description": self.transaction.description,
            "amount": float(self.transaction.amount),
            "date": self.transaction.date.isoformat(),
            "credit_card_id": self.transaction.credit_card_id,
            "category_id": self.transaction.category_id,
            "user_id": self.transaction.user_id,
            "credit_card": {
                "name": self.card_name,
                "user_id": self.card_user_id,
            },
        }
