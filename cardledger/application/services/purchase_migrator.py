"""Purchase migrator - turns one flagged transaction into a purchase."""

import structlog

from cardledger.core.config import settings
from cardledger.core.metrics import record_dependency_failure
from cardledger.domain.entities import FlaggedTransaction, MigrationOutcome, Purchase
from cardledger.domain.exceptions import DependencyException, RowMigrationException
from cardledger.domain.interfaces import (
    BillGenerator,
    PurchaseRepository,
    TransactionRepository,
    UnitOfWork,
)

logger = structlog.get_logger(__name__)


class PurchaseMigrator:
    """
    Migrates a misfiled credit-card expense into a purchase.

    Each transaction is its own failure domain: the purchase insert and
    the transaction delete succeed or fail together, and a failure never
    affects other transactions of the same batch.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        transaction_repository: TransactionRepository,
        purchase_repository: PurchaseRepository,
        bill_generator: BillGenerator,
        placeholder_description: str | None = None,
    ):
        self._uow = unit_of_work
        self._transaction_repo = transaction_repository
        self._purchase_repo = purchase_repository
        self._bill_generator = bill_generator
        self._placeholder_description = (
            placeholder_description or settings.migrated_purchase_description
        )

    async def migrate(self, flagged: FlaggedTransaction) -> MigrationOutcome:
        """
        Migrate a flagged transaction.

        Args:
            flagged: The transaction to migrate

        Returns:
            MigrationOutcome describing success or the captured error
        """
        transaction = flagged.transaction
        card_id = transaction.credit_card_id
        log = logger.bind(transaction_id=transaction.id, card_id=card_id)

        try:
            purchase = await self._move_to_purchase(flagged)
        except Exception as e:
            reason = getattr(e, "details", None) or str(e)
            error = RowMigrationException(transaction.id, reason)
            log.warning("transaction_migration_failed", error=reason, error_type=type(e).__name__)
            return MigrationOutcome.failed(transaction.id, card_id, error.message)

        log.info("transaction_migrated", purchase_id=purchase.id, amount=str(transaction.amount))

        await self._regenerate_bills(card_id)

        return MigrationOutcome.migrated(transaction.id, card_id, purchase.id)

    async def _move_to_purchase(self, flagged: FlaggedTransaction) -> Purchase:
        transaction = flagged.transaction
        purchase = Purchase.single(
            card_id=transaction.credit_card_id,
            description=transaction.description or self._placeholder_description,
            amount=transaction.amount,
            purchase_date=transaction.date,
            category_id=transaction.category_id,
            transaction_id=transaction.id,
        )

        # Insert first: without a purchase the source row must survive
        async with self._uow.atomic():
            await self._purchase_repo.add(purchase)
            deleted = await self._transaction_repo.delete(transaction.id)
            if not deleted:
                raise LookupError(f"transaction {transaction.id} no longer exists")

        await self._uow.commit()
        return purchase

    async def _regenerate_bills(self, card_id: str) -> None:
        try:
            async with self._uow.atomic():
                await self._bill_generator.generate_bills(card_id)
            await self._uow.commit()
        except Exception as e:
            error = DependencyException("bill_generator", card_id, str(e))
            record_dependency_failure("bill_generator")
            logger.error("bill_generation_failed", card_id=card_id, error=error.message)
