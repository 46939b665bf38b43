"""Results of the credit-card transaction repair."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class MigrationOutcome:
    """
    Result of migrating a single flagged transaction.

    Either the purchase was created and the transaction deleted, or
    nothing changed and ``error`` explains why.
    """

    transaction_id: str
    card_id: str
    purchase_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def migrated(cls, transaction_id: str, card_id: str, purchase_id: str) -> "MigrationOutcome":
        return cls(transaction_id=transaction_id, card_id=card_id, purchase_id=purchase_id)

    @classmethod
    def failed(cls, transaction_id: str, card_id: str, error: str) -> "MigrationOutcome":
        return cls(transaction_id=transaction_id, card_id=card_id, error=error)


@dataclass
class RepairResult:
    """Aggregate result of a repair run."""

    fixed_transactions: int = 0
    created_purchases: int = 0
    errors: List[str] = field(default_factory=list)
    touched_card_ids: List[str] = field(default_factory=list)

    def record(self, outcome: MigrationOutcome) -> None:
        """Fold a per-transaction outcome into the aggregate."""
        if outcome.succeeded:
            self.created_purchases += 1
            self.fixed_transactions += 1
            if outcome.card_id not in self.touched_card_ids:
                self.touched_card_ids.append(outcome.card_id)
        else:
            self.errors.append(outcome.error)

    def to_dict(self) -> dict:
        return {
            "fixed_transactions": self.fixed_transactions,
            "created_purchases": self.created_purchases,
            "errors": list(self.errors),
        }
