"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.application.services import (
    ConsistencyScanner,
    CreditCardRepairService,
    PurchaseMigrator,
    TransactionService,
)
from cardledger.core.security import ensure_admin, get_current_user_id
from cardledger.infrastructure.billing import (
    SqlAlchemyBillGenerator,
    SqlAlchemyLimitRecalculator,
)
from cardledger.infrastructure.database import SqlAlchemyUnitOfWork, get_db_session
from cardledger.infrastructure.repositories import (
    PostgresAccountRepository,
    PostgresCardRepository,
    PostgresCategoryRepository,
    PostgresGoalRepository,
    PostgresPurchaseRepository,
    PostgresTransactionRepository,
    PostgresUserRepository,
)

Session = Annotated[AsyncSession, Depends(get_db_session)]


# Unit of work
async def get_unit_of_work(session: Session) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session)


# Repository dependencies
async def get_transaction_repository(session: Session) -> PostgresTransactionRepository:
    """Get a TransactionRepository instance."""
    return PostgresTransactionRepository(session)


async def get_purchase_repository(session: Session) -> PostgresPurchaseRepository:
    """Get a PurchaseRepository instance."""
    return PostgresPurchaseRepository(session)


async def get_card_repository(session: Session) -> PostgresCardRepository:
    return PostgresCardRepository(session)


async def get_user_repository(session: Session) -> PostgresUserRepository:
    return PostgresUserRepository(session)


async def get_category_repository(session: Session) -> PostgresCategoryRepository:
    return PostgresCategoryRepository(session)


async def get_account_repository(session: Session) -> PostgresAccountRepository:
    return PostgresAccountRepository(session)


async def get_goal_repository(session: Session) -> PostgresGoalRepository:
    return PostgresGoalRepository(session)


# Billing collaborators
async def get_bill_generator(session: Session) -> SqlAlchemyBillGenerator:
    """Get a BillGenerator instance."""
    return SqlAlchemyBillGenerator(session)


async def get_limit_recalculator(session: Session) -> SqlAlchemyLimitRecalculator:
    """Get a LimitRecalculator instance."""
    return SqlAlchemyLimitRecalculator(session)


# Auth dependencies
async def require_admin(
    user_id: Annotated[str, Depends(get_current_user_id)],
    user_repo: Annotated[PostgresUserRepository, Depends(get_user_repository)],
) -> str:
    """Resolve the caller and require the admin capability."""
    return await ensure_admin(user_repo, user_id)


# Service dependencies
async def get_consistency_scanner(
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
) -> ConsistencyScanner:
    return ConsistencyScanner(transaction_repository=transaction_repo)


async def get_purchase_migrator(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    purchase_repo: Annotated[PostgresPurchaseRepository, Depends(get_purchase_repository)],
    bill_generator: Annotated[SqlAlchemyBillGenerator, Depends(get_bill_generator)],
) -> PurchaseMigrator:
    return PurchaseMigrator(
        unit_of_work=uow,
        transaction_repository=transaction_repo,
        purchase_repository=purchase_repo,
        bill_generator=bill_generator,
    )


async def get_repair_service(
    scanner: Annotated[ConsistencyScanner, Depends(get_consistency_scanner)],
    migrator: Annotated[PurchaseMigrator, Depends(get_purchase_migrator)],
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    limit_recalculator: Annotated[SqlAlchemyLimitRecalculator, Depends(get_limit_recalculator)],
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
) -> CreditCardRepairService:
    """Get a CreditCardRepairService instance with all dependencies."""
    return CreditCardRepairService(
        scanner=scanner,
        migrator=migrator,
        transaction_repository=transaction_repo,
        limit_recalculator=limit_recalculator,
        unit_of_work=uow,
    )


async def get_transaction_service(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    purchase_repo: Annotated[PostgresPurchaseRepository, Depends(get_purchase_repository)],
    card_repo: Annotated[PostgresCardRepository, Depends(get_card_repository)],
    user_repo: Annotated[PostgresUserRepository, Depends(get_user_repository)],
    category_repo: Annotated[PostgresCategoryRepository, Depends(get_category_repository)],
    account_repo: Annotated[PostgresAccountRepository, Depends(get_account_repository)],
    goal_repo: Annotated[PostgresGoalRepository, Depends(get_goal_repository)],
    bill_generator: Annotated[SqlAlchemyBillGenerator, Depends(get_bill_generator)],
) -> TransactionService:
    """Get a TransactionService instance with all dependencies."""
    return TransactionService(
        unit_of_work=uow,
        transaction_repository=transaction_repo,
        purchase_repository=purchase_repo,
        card_repository=card_repo,
        user_repository=user_repo,
        category_repository=category_repo,
        account_repository=account_repo,
        goal_repository=goal_repo,
        bill_generator=bill_generator,
    )
