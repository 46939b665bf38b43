"""Bill generator over the credit-card tables."""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.billing import BillWindow, bill_status, installment_windows
from cardledger.domain.interfaces import BillGenerator
from cardledger.infrastructure.database.models import (
    CreditCardBillModel,
    CreditCardModel,
    CreditCardPurchaseModel,
)

logger = structlog.get_logger(__name__)


class SqlAlchemyBillGenerator(BillGenerator):
    """
    Rebuilds bill totals from a card's purchases.

    Every installment of every purchase is assigned to a billing window.
    Existing bills are matched on ``(card_id, period_end)`` and updated in
    place so payments already recorded against them are kept.
    """

    def __init__(self, session: AsyncSession, today: Optional[date] = None):
        self._session = session
        self._today = today

    async def generate_bills(self, card_id: str) -> None:
        card = await self._session.get(CreditCardModel, card_id)
        if card is None:
            raise LookupError(f"Credit card {card_id} not found")

        totals: dict[BillWindow, Decimal] = defaultdict(lambda: Decimal("0"))
        purchases = await self._session.execute(
            select(CreditCardPurchaseModel).where(CreditCardPurchaseModel.card_id == card_id)
        )
        for purchase in purchases.scalars():
            windows = installment_windows(
                purchase.purchase_date,
                purchase.installments,
                card.closing_day,
                card.due_day,
            )
            for window in windows:
                totals[window] += purchase.installment_amount

        existing = await self._session.execute(
            select(CreditCardBillModel).where(CreditCardBillModel.card_id == card_id)
        )
        bills = {bill.period_end: bill for bill in existing.scalars()}
        today = self._today or date.today()
        now = datetime.utcnow()

        for window, total in sorted(totals.items()):
            bill = bills.get(window.period_end)
            if bill is None:
                bill = CreditCardBillModel(
                    card_id=card_id,
                    period_start=window.period_start,
                    period_end=window.period_end,
                    due_date=window.due_date,
                    paid_amount=Decimal("0"),
                )
                self._session.add(bill)

            paid = bill.paid_amount or Decimal("0")
            bill.total_amount = total
            bill.remaining_amount = max(total - paid, Decimal("0"))
            bill.status = bill_status(total, paid, window, today).value
            bill.updated_at = now

        await self._session.flush()

        logger.debug("bills_generated", card_id=card_id, bills=len(totals))
