"""Credit card domain entities."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from uuid import uuid4


class BillStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    OVERDUE = "overdue"
    PAID = "paid"


# Bills whose remaining amount still consumes the card's limit
OUTSTANDING_BILL_STATUSES = (BillStatus.OPEN, BillStatus.CLOSED, BillStatus.OVERDUE)


@dataclass
class Card:
    """
    A user's credit card.

    ``used_limit`` and ``available_limit`` are derived from the card's
    outstanding bills and are only written by the limit recalculator.
    """

    user_id: str
    name: str
    total_limit: Decimal
    used_limit: Decimal = Decimal("0")
    available_limit: Decimal | None = None
    closing_day: int = 1
    due_day: int = 10
    id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self):
        if self.available_limit is None:
            self.available_limit = self.total_limit - self.used_limit

    def owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id
