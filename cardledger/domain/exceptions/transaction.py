"""Transaction store invariant violations."""

from .base import DomainException


class CreditCardExpenseConflictException(DomainException):
    """
    Raised when a credit-card expense is written directly to the
    transactions table.

    Such expenses must be recorded as credit-card purchases.
    """

    def __init__(self, credit_card_id: str | None = None):
        super().__init__(
            message=(
                "Credit card expenses cannot be written to the transactions table. "
                "Create them through POST /v1/transactions or as a credit card purchase."
            ),
            code="CREDIT_CARD_EXPENSE_CONFLICT",
        )
        self.credit_card_id = credit_card_id
