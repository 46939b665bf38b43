"""Credit-card purchase entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4


@dataclass
class Purchase:
    """
    A purchase made with a credit card.

    Purchases feed the card's bills. When a purchase was created by
    migrating a misfiled transaction, ``transaction_id`` points back to
    the source (now deleted) transaction.
    """

    card_id: str
    description: str
    amount: Decimal
    purchase_date: date
    installments: int = 1
    installment_amount: Optional[Decimal] = None
    is_installment: bool = False
    category_id: Optional[str] = None
    transaction_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.installment_amount is None:
            self.installment_amount = self.amount

    @classmethod
    def single(
        cls,
        card_id: str,
        description: str,
        amount: Decimal,
        purchase_date: date,
        category_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> "Purchase":
        """Build a one-installment purchase."""
        return cls(
            card_id=card_id,
            description=description,
            amount=amount,
            purchase_date=purchase_date,
            installments=1,
            installment_amount=amount,
            is_installment=False,
            category_id=category_id,
            transaction_id=transaction_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "card_id": self.card_id,
            "description": self.description,
            "amount": float(self.amount),
            "purchase_date": self.purchase_date.isoformat(),
            "installments": self.installments,
            "installment_amount": float(self.installment_amount),
            "is_installment": self.is_installment,
            "category_id": self.category_id,
            "transaction_id": self.transaction_id,
            "created_at": self.created_at.isoformat() + "Z",
        }
