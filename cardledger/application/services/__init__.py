"""Application services (use cases)."""

from .consistency_scanner import ConsistencyScanner
from .purchase_migrator import PurchaseMigrator
from .repair_service import CreditCardRepairService
from .transaction_service import TransactionService

__all__ = [
    "ConsistencyScanner",
    "PurchaseMigrator",
    "CreditCardRepairService",
    "TransactionService",
]
