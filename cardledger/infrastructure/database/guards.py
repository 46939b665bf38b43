"""Insert guards for the transactions table.

Credit-card expenses must be stored as credit-card purchases. The guard
runs in two places:

- a ``before_insert`` mapper event, so every ORM write is checked before
  any constraint or flush-time validation can mask the violation;
- a PostgreSQL ``BEFORE INSERT`` trigger created together with the table,
  covering writers that bypass the ORM.
"""

import structlog
from sqlalchemy import DDL, event

from cardledger.core.metrics import record_guard_rejection
from cardledger.domain.exceptions import CreditCardExpenseConflictException
from cardledger.domain.guards import ensure_not_credit_card_expense
from .models import TransactionModel

logger = structlog.get_logger(__name__)


@event.listens_for(TransactionModel, "before_insert")
def reject_credit_card_expense(mapper, connection, target: TransactionModel) -> None:
    """Abort the flush when a credit-card expense is inserted."""
    try:
        ensure_not_credit_card_expense(target.type, target.credit_card_id)
    except CreditCardExpenseConflictException:
        record_guard_rejection()
        logger.warning(
            "credit_card_expense_rejected",
            transaction_id=target.id,
            card_id=target.credit_card_id,
            user_id=target.user_id,
        )
        raise


PREVENT_DIRECT_CREDIT_CARD_TRANSACTIONS_FUNCTION = DDL(
    """
    CREATE OR REPLACE FUNCTION prevent_direct_credit_card_transactions()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
      IF NEW.type = 'expense' AND NEW.credit_card_id IS NOT NULL THEN
        RAISE EXCEPTION 'Credit card expenses cannot be written to the transactions table. '
          'Create them through POST /v1/transactions or as a credit card purchase.'
          USING ERRCODE = 'check_violation';
      END IF;
      RETURN NEW;
    END;
    $$;
    """
)

PREVENT_DIRECT_CREDIT_CARD_TRANSACTIONS_TRIGGER = DDL(
    """
    CREATE TRIGGER prevent_direct_credit_card_transactions_trigger
      BEFORE INSERT ON transactions
      FOR EACH ROW
      EXECUTE FUNCTION prevent_direct_credit_card_transactions();
    """
)

event.listen(
    TransactionModel.__table__,
    "after_create",
    PREVENT_DIRECT_CREDIT_CARD_TRANSACTIONS_FUNCTION.execute_if(dialect="postgresql"),
)
event.listen(
    TransactionModel.__table__,
    "after_create",
    PREVENT_DIRECT_CREDIT_CARD_TRANSACTIONS_TRIGGER.execute_if(dialect="postgresql"),
)
