"""PostgreSQL repository implementation for credit-card purchases."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.entities import Purchase
from cardledger.domain.exceptions import StorageException
from cardledger.domain.interfaces import PurchaseRepository
from cardledger.infrastructure.database.models import CreditCardPurchaseModel


class PostgresPurchaseRepository(PurchaseRepository):
    """PostgreSQL-backed purchase repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, purchase: Purchase) -> Purchase:
        model = CreditCardPurchaseModel(
            id=purchase.id,
            card_id=purchase.card_id,
            description=purchase.description,
            amount=purchase.amount,
            purchase_date=purchase.purchase_date,
            installments=purchase.installments,
            installment_amount=purchase.installment_amount,
            is_installment=purchase.is_installment,
            category_id=purchase.category_id,
            transaction_id=purchase.transaction_id,
            created_at=purchase.created_at,
        )

        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise StorageException("Failed to create credit card purchase", details=str(e)) from e

        return purchase

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[Purchase]:
        stmt = select(CreditCardPurchaseModel).where(
            CreditCardPurchaseModel.transaction_id == transaction_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    def _to_entity(self, model: CreditCardPurchaseModel) -> Purchase:
        return Purchase(
            id=model.id,
            card_id=model.card_id,
            description=model.description,
            amount=model.amount,
            purchase_date=model.purchase_date,
            installments=model.installments,
            installment_amount=model.installment_amount,
            is_installment=model.is_installment,
            category_id=model.category_id,
            transaction_id=model.transaction_id,
            created_at=model.created_at,
        )
