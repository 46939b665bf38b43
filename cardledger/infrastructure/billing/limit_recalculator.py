"""Limit recalculator over the credit-card tables."""

from datetime import datetime
from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.entities.card import OUTSTANDING_BILL_STATUSES
from cardledger.domain.interfaces import LimitRecalculator
from cardledger.infrastructure.database.models import CreditCardBillModel, CreditCardModel

logger = structlog.get_logger(__name__)


class SqlAlchemyLimitRecalculator(LimitRecalculator):
    """Derives used and available limit from outstanding bills."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def recalculate(self, card_id: str) -> None:
        card = await self._session.get(CreditCardModel, card_id)
        if card is None:
            raise LookupError(f"Credit card {card_id} not found")

        stmt = select(
            func.coalesce(func.sum(CreditCardBillModel.remaining_amount), 0)
        ).where(
            CreditCardBillModel.card_id == card_id,
            CreditCardBillModel.status.in_([status.value for status in OUTSTANDING_BILL_STATUSES]),
        )
        result = await self._session.execute(stmt)
        used = Decimal(str(result.scalar_one())).quantize(Decimal("0.01"))

        card.used_limit = used
        card.available_limit = card.total_limit - used
        card.updated_at = datetime.utcnow()
        await self._session.flush()

        logger.debug(
            "card_limits_recalculated",
            card_id=card_id,
            used_limit=str(used),
            available_limit=str(card.available_limit),
        )
