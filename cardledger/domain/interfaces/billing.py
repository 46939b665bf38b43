"""Credit-card billing collaborator interfaces."""

from abc import ABC, abstractmethod


class BillGenerator(ABC):
    """
    Keeps a card's bills in sync with its purchases.

    Creates missing billing cycles and updates the totals of existing
    ones so they reflect every purchase of the card.
    """

    @abstractmethod
    async def generate_bills(self, card_id: str) -> None:
        """
        Create or update the bills of a card.

        Args:
            card_id: The card's identifier

        Raises:
            Exception: Any failure; callers treat it as non-fatal
        """
        ...


class LimitRecalculator(ABC):
    """
    Recomputes a card's limit usage from its outstanding bills.

    After a call, ``used_limit`` equals the sum of ``remaining_amount``
    over open, closed and overdue bills and ``available_limit`` equals
    ``total_limit - used_limit``.
    """

    @abstractmethod
    async def recalculate(self, card_id: str) -> None:
        """
        Recalculate the limits of a card.

        Args:
            card_id: The card's identifier
        """
        ...
