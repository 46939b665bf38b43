"""Consistency scanner - finds credit-card expenses filed as transactions."""

from typing import List

import structlog

from cardledger.application.dto import RepairCheckResponse
from cardledger.core.metrics import record_repair_scan
from cardledger.domain.entities import FlaggedTransaction
from cardledger.domain.interfaces import TransactionRepository

logger = structlog.get_logger(__name__)


class ConsistencyScanner:
    """
    Finds transactions that should have been credit-card purchases.

    A transaction is flagged when it is an expense, references a credit
    card, and no purchase has been migrated from it yet. Scanning never
    writes anything.
    """

    def __init__(self, transaction_repository: TransactionRepository):
        self._transaction_repo = transaction_repository

    async def find_flagged(self) -> List[FlaggedTransaction]:
        """
        List the flagged transactions.

        Returns:
            Flagged transactions ordered by transaction id, each with
            its card's name and owner

        Raises:
            StorageException: If the transactions cannot be queried
        """
        flagged = await self._transaction_repo.find_unmigrated_card_expenses()
        record_repair_scan(len(flagged))
        logger.info("flagged_transactions_scanned", count=len(flagged))
        return flagged

    async def report(self) -> RepairCheckResponse:
        """Summarize how many transactions need fixing."""
        flagged = await self.find_flagged()
        return RepairCheckResponse.from_entities(flagged)
