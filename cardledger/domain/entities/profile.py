"""User-owned reference entities read by the transaction entry point."""

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import uuid4

from .transaction import TransactionType


@dataclass
class User:
    id: str
    email: str = ""
    is_admin: bool = False


@dataclass
class Category:
    user_id: str
    name: str
    type: TransactionType
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass
class Account:
    user_id: str
    name: str
    is_default: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass
class Goal:
    """A savings goal that incomes can contribute to."""

    user_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    id: str = field(default_factory=lambda: str(uuid4()))
