"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .validation import (
    ValidationException,
    InvalidTransactionRequestException,
    InvalidRepairActionException,
    CategoryNotResolvedException,
)
from .auth import (
    AuthenticationException,
    AuthorizationException,
    CardOwnershipException,
)
from .transaction import CreditCardExpenseConflictException
from .repair import RowMigrationException, DependencyException
from .storage import StorageException

__all__ = [
    "DomainException",
    "ValidationException",
    "InvalidTransactionRequestException",
    "InvalidRepairActionException",
    "CategoryNotResolvedException",
    "AuthenticationException",
    "AuthorizationException",
    "CardOwnershipException",
    "CreditCardExpenseConflictException",
    "RowMigrationException",
    "DependencyException",
    "StorageException",
]
