"""Repair service - orchestrates the credit-card transaction repair."""

from typing import Iterable, List

import structlog

from cardledger.application.dto import RepairCheckResponse, RepairRunResponse
from cardledger.application.services.consistency_scanner import ConsistencyScanner
from cardledger.application.services.purchase_migrator import PurchaseMigrator
from cardledger.core.metrics import (
    record_dependency_failure,
    record_repair_run,
    track_repair_latency,
)
from cardledger.domain.entities import RepairResult
from cardledger.domain.exceptions import DependencyException, InvalidRepairActionException
from cardledger.domain.interfaces import LimitRecalculator, TransactionRepository, UnitOfWork

logger = structlog.get_logger(__name__)


class CreditCardRepairService:
    """
    Application service for repairing misfiled credit-card expenses.

    Scans for flagged transactions, migrates each one into a purchase and
    finally recalculates the limits of the affected cards. Callers are
    expected to have checked admin rights already.
    """

    FIX_ACTION = "fix"

    def __init__(
        self,
        scanner: ConsistencyScanner,
        migrator: PurchaseMigrator,
        transaction_repository: TransactionRepository,
        limit_recalculator: LimitRecalculator,
        unit_of_work: UnitOfWork,
    ):
        self._scanner = scanner
        self._migrator = migrator
        self._transaction_repo = transaction_repository
        self._limit_recalculator = limit_recalculator
        self._uow = unit_of_work

    async def check(self) -> RepairCheckResponse:
        """Report the transactions that still need fixing."""
        return await self._scanner.report()

    async def execute(self, action: str | None) -> RepairRunResponse:
        """
        Run a repair action.

        Raises:
            InvalidRepairActionException: If the action is not supported
        """
        if action != self.FIX_ACTION:
            raise InvalidRepairActionException(action)

        result = await self.fix()
        return RepairRunResponse.from_entity(result)

    async def fix(self) -> RepairResult:
        """
        Migrate every flagged transaction into a purchase.

        Per-transaction failures are collected in ``errors`` and never
        stop the batch.

        Returns:
            RepairResult with counts and per-transaction errors

        Raises:
            StorageException: If the flagged transactions cannot be listed
        """
        logger.info("repair_started")

        with track_repair_latency():
            flagged = await self._scanner.find_flagged()

            result = RepairResult()
            for item in flagged:
                outcome = await self._migrator.migrate(item)
                result.record(outcome)

            await self._recalculate_limits(result.touched_card_ids)

        record_repair_run(result.fixed_transactions, len(result.errors))
        logger.info(
            "repair_completed",
            flagged=len(flagged),
            fixed_transactions=result.fixed_transactions,
            created_purchases=result.created_purchases,
            errors=len(result.errors),
        )

        return result

    async def _recalculate_limits(self, touched_card_ids: Iterable[str]) -> None:
        """
        Recalculate limits for every card still linked to a transaction.

        Cards touched by this run are included even when no transaction
        references them anymore.
        """
        card_ids = await self._sweep_card_ids(touched_card_ids)

        for card_id in card_ids:
            try:
                async with self._uow.atomic():
                    await self._limit_recalculator.recalculate(card_id)
                await self._uow.commit()
            except Exception as e:
                error = DependencyException("limit_recalculator", card_id, str(e))
                record_dependency_failure("limit_recalculator")
                logger.error("limit_recalculation_failed", card_id=card_id, error=error.message)

        logger.info("limits_recalculated", cards=len(card_ids))

    async def _sweep_card_ids(self, touched_card_ids: Iterable[str]) -> List[str]:
        try:
            linked = await self._transaction_repo.get_linked_card_ids()
        except Exception as e:
            record_dependency_failure("limit_recalculator")
            logger.error("linked_cards_query_failed", error=str(e))
            linked = []
        return sorted(set(linked) | set(touched_card_ids))
