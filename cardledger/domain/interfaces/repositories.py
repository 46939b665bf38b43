"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import AsyncContextManager, List, Optional

from cardledger.domain.entities import (
    Account,
    Card,
    Category,
    FlaggedTransaction,
    Goal,
    Purchase,
    Transaction,
    TransactionType,
    User,
)


class UnitOfWork(ABC):
    """
    Transaction boundary shared by the repositories of a request.

    Implementations may use database savepoints, in-memory snapshots, etc.
    """

    @abstractmethod
    def atomic(self) -> AsyncContextManager[None]:
        """
        Open a nested atomic block.

        Everything written inside the block is undone if the block
        raises; the exception is re-raised.
        """
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Make everything written so far durable."""
        ...


class TransactionRepository(ABC):
    """
    Abstract repository for the generic transactions table.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def add(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        Args:
            transaction: The transaction to save

        Returns:
            The saved transaction

        Raises:
            CreditCardExpenseConflictException: If it is a credit-card expense
        """
        ...

    @abstractmethod
    async def delete(self, transaction_id: str) -> bool:
        """
        Delete a transaction.

        Returns:
            True if a row was deleted
        """
        ...

    @abstractmethod
    async def find_unmigrated_card_expenses(self) -> List[FlaggedTransaction]:
        """
        Find credit-card expenses that have no matching purchase.

        Only transactions whose card exists are returned, each with the
        card's name and owner.

        Returns:
            Flagged transactions ordered by transaction id
        """
        ...

    @abstractmethod
    async def get_linked_card_ids(self) -> List[str]:
        """
        Distinct ids of cards referenced by any transaction.

        Returns:
            Card ids, sorted
        """
        ...


class PurchaseRepository(ABC):
    """Abstract repository for credit-card purchases."""

    @abstractmethod
    async def add(self, purchase: Purchase) -> Purchase:
        """
        Persist a new purchase.

        Raises:
            Exception: If the card does not exist or a purchase already
                references the same transaction
        """
        ...

    @abstractmethod
    async def get_by_transaction_id(self, transaction_id: str) -> Optional[Purchase]:
        """Retrieve the purchase migrated from a transaction, if any."""
        ...


class CardRepository(ABC):
    """Abstract repository for credit cards."""

    @abstractmethod
    async def get_by_id(self, card_id: str) -> Optional[Card]:
        """Retrieve a card by ID."""
        ...


class UserRepository(ABC):
    """Abstract repository for users."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve a user by ID."""
        ...

    @abstractmethod
    async def is_admin(self, user_id: str) -> bool:
        """Check whether a user holds the admin role."""
        ...


class CategoryRepository(ABC):
    """Abstract repository for transaction categories."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def find_by_name(
        self,
        user_id: str,
        name: str,
        transaction_type: TransactionType,
    ) -> Optional[Category]:
        """
        Find a user's category by name and type.

        Matching is case-insensitive.
        """
        ...


class AccountRepository(ABC):
    """Abstract repository for bank accounts."""

    @abstractmethod
    async def get_default(self, user_id: str) -> Optional[Account]:
        """Retrieve the user's default account, if any."""
        ...

    @abstractmethod
    async def create_default(self, user_id: str, name: str) -> Account:
        """Create and return a default account for the user."""
        ...


class GoalRepository(ABC):
    """Abstract repository for savings goals."""

    @abstractmethod
    async def get_by_id(self, goal_id: str) -> Optional[Goal]:
        ...

    @abstractmethod
    async def add_progress(self, goal_id: str, amount: Decimal) -> Goal:
        """
        Increase a goal's current amount.

        Returns:
            The updated goal
        """
        ...
