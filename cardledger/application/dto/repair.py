"""Data transfer objects for the credit-card transaction repair."""

from dataclasses import dataclass
from typing import List

from cardledger.domain.entities import FlaggedTransaction, RepairResult


@dataclass(frozen=True)
class RepairCheckResponse:
    """Transactions that still need to be migrated to purchases."""

    transactions_to_fix: int
    transactions: List[dict]

    @classmethod
    def from_entities(cls, flagged: List[FlaggedTransaction]) -> "RepairCheckResponse":
        return cls(
            transactions_to_fix=len(flagged),
            transactions=[item.to_dict() for item in flagged],
        )


@dataclass(frozen=True)
class RepairRunResponse:
    """Aggregate counts of a repair run."""

    fixed_transactions: int
    created_purchases: int
    errors: List[str]

    @classmethod
    def from_entity(cls, result: RepairResult) -> "RepairRunResponse":
        return cls(
            fixed_transactions=result.fixed_transactions,
            created_purchases=result.created_purchases,
            errors=list(result.errors),
        )
