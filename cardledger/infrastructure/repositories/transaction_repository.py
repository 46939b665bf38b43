"""PostgreSQL implementation of TransactionRepository."""

from typing import List

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.entities import FlaggedTransaction, Transaction, TransactionType
from cardledger.domain.exceptions import StorageException
from cardledger.domain.interfaces import TransactionRepository
from cardledger.infrastructure.database.models import (
    CreditCardModel,
    CreditCardPurchaseModel,
    TransactionModel,
)


class PostgresTransactionRepository(TransactionRepository):
    """
    PostgreSQL implementation of the Transaction repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, transaction: Transaction) -> Transaction:
        """Persist a transaction; the insert guard runs on flush."""
        model = TransactionModel(
            id=transaction.id,
            user_id=transaction.user_id,
            type=transaction.type.value,
            amount=transaction.amount,
            date=transaction.date,
            description=transaction.description,
            category_id=transaction.category_id,
            account_id=transaction.account_id,
            credit_card_id=transaction.credit_card_id,
            goal_id=transaction.goal_id,
            created_at=transaction.created_at,
        )

        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise StorageException("Failed to create transaction", details=str(e)) from e

        return transaction

    async def delete(self, transaction_id: str) -> bool:
        stmt = delete(TransactionModel).where(TransactionModel.id == transaction_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def find_unmigrated_card_expenses(self) -> List[FlaggedTransaction]:
        """Expenses with a card and no purchase migrated from them."""
        already_migrated = exists().where(
            CreditCardPurchaseModel.transaction_id == TransactionModel.id
        )
        stmt = (
            select(TransactionModel, CreditCardModel.name, CreditCardModel.user_id)
            .join(CreditCardModel, TransactionModel.credit_card_id == CreditCardModel.id)
            .where(
                TransactionModel.type == TransactionType.EXPENSE.value,
                TransactionModel.credit_card_id.is_not(None),
                ~already_migrated,
            )
            .order_by(TransactionModel.id)
        )

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageException("Failed to query transactions", details=str(e)) from e

        return [
            FlaggedTransaction(
                transaction=self._to_entity(model),
                card_name=card_name,
                card_user_id=card_user_id,
            )
            for model, card_name, card_user_id in result.all()
        ]

    async def get_linked_card_ids(self) -> List[str]:
        stmt = (
            select(TransactionModel.credit_card_id)
            .where(TransactionModel.credit_card_id.is_not(None))
            .distinct()
            .order_by(TransactionModel.credit_card_id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            type=TransactionType(model.type),
            amount=model.amount,
            date=model.date,
            description=model.description or "",
            category_id=model.category_id,
            account_id=model.account_id,
            credit_card_id=model.credit_card_id,
            goal_id=model.goal_id,
            created_at=model.created_at,
        )
