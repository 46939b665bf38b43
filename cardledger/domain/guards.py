"""Write-time invariants of the transactions table."""

from typing import Optional

from cardledger.domain.entities import TransactionType
from cardledger.domain.exceptions import CreditCardExpenseConflictException


def is_credit_card_expense(transaction_type, credit_card_id: Optional[str]) -> bool:
    """Check whether a row would be an expense paid with a credit card."""
    return (
        transaction_type == TransactionType.EXPENSE
        and credit_card_id is not None
    )


def ensure_not_credit_card_expense(transaction_type, credit_card_id: Optional[str]) -> None:
    """
    Reject credit-card expenses bound for the transactions table.

    Args:
        transaction_type: ``TransactionType`` or its string value
        credit_card_id: The card the expense was paid with, if any

    Raises:
        CreditCardExpenseConflictException: If the row is an expense with a card
    """
    if is_credit_card_expense(transaction_type, credit_card_id):
        raise CreditCardExpenseConflictException(credit_card_id)
