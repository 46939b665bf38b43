"""Billing calendar rules for credit cards.

A purchase made on or before the card's closing day belongs to the bill
that closes that month; later purchases roll into the next month's bill.
Bills are due on ``due_day`` of the month after they close.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator, NamedTuple

from .entities.card import BillStatus


class BillWindow(NamedTuple):
    period_start: date
    period_end: date
    due_date: date


def add_month(year: int, month: int, delta: int) -> tuple[int, int]:
    total = year * 12 + (month - 1) + delta
    return total // 12, total % 12 + 1


def clamp_day(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def bill_window(purchase_date: date, closing_day: int, due_day: int) -> BillWindow:
    """Return the billing cycle a purchase date falls into."""
    if purchase_date.day <= closing_day:
        end_year, end_month = purchase_date.year, purchase_date.month
    else:
        end_year, end_month = add_month(purchase_date.year, purchase_date.month, 1)

    period_end = clamp_day(end_year, end_month, closing_day)
    prev_year, prev_month = add_month(end_year, end_month, -1)
    period_start = clamp_day(prev_year, prev_month, closing_day) + timedelta(days=1)

    due_year, due_month = add_month(end_year, end_month, 1)
    due_date = clamp_day(due_year, due_month, due_day)

    return BillWindow(period_start, period_end, due_date)


def installment_windows(
    purchase_date: date,
    installments: int,
    closing_day: int,
    due_day: int,
) -> Iterator[BillWindow]:
    """Yield one window per installment, in consecutive bills."""
    first = bill_window(purchase_date, closing_day, due_day)
    yield first
    for offset in range(1, installments):
        year, month = add_month(first.period_end.year, first.period_end.month, offset)
        yield bill_window(clamp_day(year, month, closing_day), closing_day, due_day)


def bill_status(
    total_amount: Decimal,
    paid_amount: Decimal,
    window: BillWindow,
    today: date,
) -> BillStatus:
    if paid_amount >= total_amount:
        return BillStatus.PAID
    if today <= window.period_end:
        return BillStatus.OPEN
    if today <= window.due_date:
        return BillStatus.CLOSED
    return BillStatus.OVERDUE
