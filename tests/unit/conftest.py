"""
Fixtures for unit tests.

Provides in-memory implementations of the repository, unit-of-work and
billing ports. The fake unit of work snapshots the store when an atomic
block starts and restores it when the block raises, mirroring a
SAVEPOINT rollback.
"""

import copy
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import AsyncIterator, Dict, List, Optional, Set

import pytest

from cardledger.application.services import (
    ConsistencyScanner,
    CreditCardRepairService,
    PurchaseMigrator,
    TransactionService,
)
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
from cardledger.domain.exceptions import StorageException
from cardledger.domain.guards import ensure_not_credit_card_expense
from cardledger.domain.interfaces import (
    AccountRepository,
    BillGenerator,
    CardRepository,
    CategoryRepository,
    GoalRepository,
    LimitRecalculator,
    PurchaseRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository,
)


# =============================================================================
# In-Memory Store
# =============================================================================

@dataclass
class InMemoryStore:
    transactions: Dict[str, Transaction] = field(default_factory=dict)
    purchases: Dict[str, Purchase] = field(default_factory=dict)
    cards: Dict[str, Card] = field(default_factory=dict)
    users: Dict[str, User] = field(default_factory=dict)
    categories: Dict[str, Category] = field(default_factory=dict)
    accounts: Dict[str, Account] = field(default_factory=dict)
    goals: Dict[str, Goal] = field(default_factory=dict)

    def snapshot(self) -> dict:
        return copy.deepcopy(self.__dict__)

    def restore(self, state: dict) -> None:
        self.__dict__.update(state)


class FakeUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        state = self.store.snapshot()
        try:
            yield
        except Exception:
            self.store.restore(state)
            self.rollbacks += 1
            raise

    async def commit(self) -> None:
        self.commits += 1


# =============================================================================
# Fake Repositories
# =============================================================================

class FakeTransactionRepository(TransactionRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.fail_scan = False
        self.fail_linked_cards = False

    async def add(self, transaction: Transaction) -> Transaction:
        ensure_not_credit_card_expense(transaction.type, transaction.credit_card_id)
        self.store.transactions[transaction.id] = transaction
        return transaction

    async def delete(self, transaction_id: str) -> bool:
        return self.store.transactions.pop(transaction_id, None) is not None

    async def find_unmigrated_card_expenses(self) -> List[FlaggedTransaction]:
        if self.fail_scan:
            raise StorageException("Failed to query transactions", details="connection reset")

        migrated = {p.transaction_id for p in self.store.purchases.values()}
        flagged = []
        for transaction_id in sorted(self.store.transactions):
            transaction = self.store.transactions[transaction_id]
            card = self.store.cards.get(transaction.credit_card_id or "")
            if transaction.is_credit_card_expense and card and transaction_id not in migrated:
                flagged.append(FlaggedTransaction(transaction, card.name, card.user_id))
        return flagged

    async def get_linked_card_ids(self) -> List[str]:
        if self.fail_linked_cards:
            raise StorageException("Failed to query transactions")
        return sorted({t.credit_card_id for t in self.store.transactions.values() if t.credit_card_id})


class FakePurchaseRepository(PurchaseRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.fail_for_transactions: Set[str] = set()

    async def add(self, purchase: Purchase) -> Purchase:
        if purchase.transaction_id in self.fail_for_transactions:
            raise StorageException(
                "Failed to create credit card purchase",
                details='insert on "credit_card_purchases" violates foreign key "card_id"',
            )
        if purchase.card_id not in self.store.cards:
            raise StorageException("Failed to create credit card purchase", details="unknown card_id")
        if purchase.transaction_id and any(
            p.transaction_id == purchase.transaction_id for p in self.store.purchases.values()
        ):
            raise StorageException(
                "Failed to create credit card purchase",
                details="duplicate key value violates unique constraint",
            )
        self.store.purchases[purchase.id] = purchase
        return purchase

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[Purchase]:
        return next(
            (p for p in self.store.purchases.values() if p.transaction_id == transaction_id),
            None,
        )


class FakeCardRepository(CardRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, card_id: str) -> Optional[Card]:
        return self.store.cards.get(card_id)


class FakeUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.store.users.get(user_id)

    async def is_admin(self, user_id: str) -> bool:
        user = self.store.users.get(user_id)
        return bool(user and user.is_admin)


class FakeCategoryRepository(CategoryRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        return self.store.categories.get(category_id)

    async def find_by_name(
        self,
        user_id: str,
        name: str,
        transaction_type: TransactionType,
    ) -> Optional[Category]:
        for category in self.store.categories.values():
            if (
                category.user_id == user_id
                and category.type == transaction_type
                and category.name.lower() == name.strip().lower()
            ):
                return category
        return None


class FakeAccountRepository(AccountRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_default(self, user_id: str) -> Optional[Account]:
        return next(
            (a for a in self.store.accounts.values() if a.user_id == user_id and a.is_default),
            None,
        )

    async def create_default(self, user_id: str, name: str) -> Account:
        account = Account(user_id=user_id, name=name, is_default=True)
        self.store.accounts[account.id] = account
        return account


class FakeGoalRepository(GoalRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, goal_id: str) -> Optional[Goal]:
        return self.store.goals.get(goal_id)

    async def add_progress(self, goal_id: str, amount: Decimal) -> Goal:
        goal = self.store.goals[goal_id]
        goal.current_amount += amount
        return goal


# =============================================================================
# Fake Billing Collaborators
# =============================================================================

class RecordingBillGenerator(BillGenerator):
    def __init__(self):
        self.calls: List[str] = []
        self.fail = False

    async def generate_bills(self, card_id: str) -> None:
        self.calls.append(card_id)
        if self.fail:
            raise RuntimeError("bill generator unavailable")


class RecordingLimitRecalculator(LimitRecalculator):
    def __init__(self):
        self.calls: List[str] = []
        self.fail_for: Set[str] = set()

    async def recalculate(self, card_id: str) -> None:
        self.calls.append(card_id)
        if card_id in self.fail_for:
            raise RuntimeError(f"cannot lock card {card_id}")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store() -> InMemoryStore:
    """Store seeded with two users, a card and default categories."""
    store = InMemoryStore()
    store.users["admin"] = User(id="admin", is_admin=True)
    store.users["u1"] = User(id="u1")
    store.users["u2"] = User(id="u2")
    store.cards["c1"] = Card(id="c1", user_id="u1", name="Nubank", total_limit=Decimal("5000.00"))
    store.cards["c2"] = Card(id="c2", user_id="u2", name="Inter", total_limit=Decimal("1000.00"))
    for user_id in ("u1", "u2"):
        for transaction_type in TransactionType:
            category = Category(user_id=user_id, name="Outros", type=transaction_type)
            store.categories[category.id] = category
    return store


def add_card_expense(
    store: InMemoryStore,
    transaction_id: str,
    card_id: str = "c1",
    amount: str = "150.00",
    description: str = "Market",
    user_id: str = "u1",
) -> Transaction:
    """Put a credit-card expense straight into the store, bypassing the guard."""
    transaction = Transaction(
        id=transaction_id,
        user_id=user_id,
        type=TransactionType.EXPENSE,
        amount=Decimal(amount),
        date=date(2025, 9, 1),
        description=description,
        credit_card_id=card_id,
    )
    store.transactions[transaction_id] = transaction
    return transaction


@pytest.fixture
def uow(store: InMemoryStore) -> FakeUnitOfWork:
    return FakeUnitOfWork(store)


@pytest.fixture
def transaction_repo(store: InMemoryStore) -> FakeTransactionRepository:
    return FakeTransactionRepository(store)


@pytest.fixture
def purchase_repo(store: InMemoryStore) -> FakePurchaseRepository:
    return FakePurchaseRepository(store)


@pytest.fixture
def bill_generator() -> RecordingBillGenerator:
    return RecordingBillGenerator()


@pytest.fixture
def limit_recalculator() -> RecordingLimitRecalculator:
    return RecordingLimitRecalculator()


@pytest.fixture
def scanner(transaction_repo: FakeTransactionRepository) -> ConsistencyScanner:
    return ConsistencyScanner(transaction_repository=transaction_repo)


@pytest.fixture
def migrator(
    uow: FakeUnitOfWork,
    transaction_repo: FakeTransactionRepository,
    purchase_repo: FakePurchaseRepository,
    bill_generator: RecordingBillGenerator,
) -> PurchaseMigrator:
    return PurchaseMigrator(
        unit_of_work=uow,
        transaction_repository=transaction_repo,
        purchase_repository=purchase_repo,
        bill_generator=bill_generator,
    )


@pytest.fixture
def repair_service(
    scanner: ConsistencyScanner,
    migrator: PurchaseMigrator,
    transaction_repo: FakeTransactionRepository,
    limit_recalculator: RecordingLimitRecalculator,
    uow: FakeUnitOfWork,
) -> CreditCardRepairService:
    return CreditCardRepairService(
        scanner=scanner,
        migrator=migrator,
        transaction_repository=transaction_repo,
        limit_recalculator=limit_recalculator,
        unit_of_work=uow,
    )


@pytest.fixture
def transaction_service(
    store: InMemoryStore,
    uow: FakeUnitOfWork,
    transaction_repo: FakeTransactionRepository,
    purchase_repo: FakePurchaseRepository,
    bill_generator: RecordingBillGenerator,
) -> TransactionService:
    return TransactionService(
        unit_of_work=uow,
        transaction_repository=transaction_repo,
        purchase_repository=purchase_repo,
        card_repository=FakeCardRepository(store),
        user_repository=FakeUserRepository(store),
        category_repository=FakeCategoryRepository(store),
        account_repository=FakeAccountRepository(store),
        goal_repository=FakeGoalRepository(store),
        bill_generator=bill_generator,
    )
