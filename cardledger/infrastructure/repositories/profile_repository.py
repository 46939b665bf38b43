"""PostgreSQL repositories for users and their reference data."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.entities import Account, Category, Goal, TransactionType, User
from cardledger.domain.interfaces import (
    AccountRepository,
    CategoryRepository,
    GoalRepository,
    UserRepository,
)
from cardledger.infrastructure.database.models import (
    AccountModel,
    CategoryModel,
    GoalModel,
    UserModel,
)


class PostgresUserRepository(UserRepository):
    """PostgreSQL-backed user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)

        if model is None:
            return None

        return User(id=model.id, email=model.email, is_admin=model.is_admin)

    async def is_admin(self, user_id: str) -> bool:
        stmt = select(UserModel.is_admin).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.scalar_one_or_none())


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL-backed category repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        model = await self._session.get(CategoryModel, category_id)
        return self._to_entity(model) if model else None

    async def find_by_name(
        self,
        user_id: str,
        name: str,
        transaction_type: TransactionType,
    ) -> Optional[Category]:
        stmt = (
            select(CategoryModel)
            .where(
                CategoryModel.user_id == user_id,
                CategoryModel.type == transaction_type.value,
                func.lower(CategoryModel.name) == name.strip().lower(),
            )
            .order_by(CategoryModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            type=TransactionType(model.type),
        )


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL-backed account repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_default(self, user_id: str) -> Optional[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.user_id == user_id, AccountModel.is_default.is_(True))
            .order_by(AccountModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return Account(id=model.id, user_id=model.user_id, name=model.name, is_default=True)

    async def create_default(self, user_id: str, name: str) -> Account:
        account = Account(user_id=user_id, name=name, is_default=True)
        self._session.add(
            AccountModel(id=account.id, user_id=user_id, name=name, is_default=True)
        )
        await self._session.flush()
        return account


class PostgresGoalRepository(GoalRepository):
    """PostgreSQL-backed savings goal repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, goal_id: str) -> Optional[Goal]:
        model = await self._session.get(GoalModel, goal_id)
        return self._to_entity(model) if model else None

    async def add_progress(self, goal_id: str, amount: Decimal) -> Goal:
        model = await self._session.get(GoalModel, goal_id, with_for_update=True)
        if model is None:
            raise ValueError(f"Goal {goal_id} not found")

        model.current_amount = (model.current_amount or Decimal("0")) + amount
        await self._session.flush()

        return self._to_entity(model)

    def _to_entity(self, model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            target_amount=model.target_amount,
            current_amount=model.current_amount,
        )
