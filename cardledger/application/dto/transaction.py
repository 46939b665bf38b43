"""Data transfer objects for transaction creation."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from cardledger.domain.entities import Purchase, Transaction, TransactionType

# Amounts are stored as NUMERIC(12, 2)
AMOUNT_SCALE = 2
MAX_AMOUNT = Decimal(10) ** (12 - AMOUNT_SCALE)


@dataclass(frozen=True)
class CreateTransactionRequest:
    """Input data for creating a transaction on behalf of an integration."""

    user_id: Optional[str]
    type: Optional[str]
    amount: Optional[Decimal]
    date: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[str] = None
    goal_id: Optional[str] = None
    account_id: Optional[str] = None
    credit_card_id: Optional[str] = None

    def __post_init__(self):
        # A blank card id means no card
        object.__setattr__(self, "credit_card_id", (self.credit_card_id or "").strip() or None)

    def validate(self) -> List[str]:
        missing = [
            name
            for name, value in (("type", self.type), ("amount", self.amount), ("user_id", self.user_id))
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            return [f"Missing required fields: {', '.join(missing)}"]

        errors = []

        if self.type not in {t.value for t in TransactionType}:
            errors.append("type must be 'income' or 'expense'")

        if self.amount <= 0:
            errors.append("amount must be positive")
        elif -self.amount.normalize().as_tuple().exponent > AMOUNT_SCALE:
            errors.append(f"amount must have at most {AMOUNT_SCALE} decimal places")
        elif self.amount >= MAX_AMOUNT:
            errors.append(f"amount must be less than {MAX_AMOUNT}")

        if self.date:
            try:
                self._parse_date(self.date)
            except ValueError:
                errors.append("date must be an ISO 8601 date")

        return errors

    @property
    def transaction_type(self) -> TransactionType:
        return TransactionType(self.type)

    @property
    def is_credit_card_purchase(self) -> bool:
        return self.transaction_type == TransactionType.EXPENSE and bool(self.credit_card_id)

    @property
    def effective_date(self) -> date:
        """The request date without its time part, or today."""
        if not self.date:
            return date.today()
        return self._parse_date(self.date)

    @staticmethod
    def _parse_date(value: str) -> date:
        day = value.split("T")[0]
        return datetime.strptime(day, "%Y-%m-%d").date()


@dataclass(frozen=True)
class CreateTransactionResponse:
    """Response data for a created transaction or purchase."""

    type: str
    id: str
    data: dict

    @classmethod
    def from_purchase(cls, purchase: Purchase) -> "CreateTransactionResponse":
        return cls(type="credit_card_purchase", id=purchase.id, data=purchase.to_dict())

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "CreateTransactionResponse":
        return cls(type="transaction", id=transaction.id, data=transaction.to_dict())

    @property
    def is_purchase(self) -> bool:
        return self.type == "credit_card_purchase"
