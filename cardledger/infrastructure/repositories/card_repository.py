"""PostgreSQL implementation of CardRepository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.entities import Card
from cardledger.domain.interfaces import CardRepository
from cardledger.infrastructure.database.models import CreditCardModel


class PostgresCardRepository(CardRepository):
    """PostgreSQL-backed credit card repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, card_id: str) -> Optional[Card]:
        stmt = select(CreditCardModel).where(CreditCardModel.id == card_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return Card(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            total_limit=model.total_limit,
            used_limit=model.used_limit,
            available_limit=model.available_limit,
            closing_day=model.closing_day,
            due_day=model.due_day,
        )
