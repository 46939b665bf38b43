"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database with SAVEPOINT support
- Test client for the FastAPI app bound to that database
- Seeded users, cards and categories
- Bearer tokens signed with the configured secret
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy import event, insert
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from cardledger.core.config import settings
from cardledger.infrastructure.database import (
    Base,
    CategoryModel,
    CreditCardModel,
    TransactionModel,
    UserModel,
    get_db_session,
)
from cardledger.main import app


ADMIN_ID = "00000000-0000-0000-0000-00000000000a"
USER_ID = "00000000-0000-0000-0000-000000000001"
OTHER_USER_ID = "00000000-0000-0000-0000-000000000002"
CARD_ID = "00000000-0000-0000-0000-0000000000c1"
OTHER_CARD_ID = "00000000-0000-0000-0000-0000000000c2"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; emit BEGIN ourselves
    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for direct repository tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory) -> None:
    """An admin, two users each with a card, and default categories."""
    async with session_factory() as session:
        session.add_all(
            [
                UserModel(id=ADMIN_ID, email="admin@example.com", is_admin=True),
                UserModel(id=USER_ID, email="ana@example.com"),
                UserModel(id=OTHER_USER_ID, email="bruno@example.com"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                CreditCardModel(
                    id=CARD_ID,
                    user_id=USER_ID,
                    name="Nubank",
                    total_limit=Decimal("5000.00"),
                    available_limit=Decimal("5000.00"),
                    closing_day=5,
                    due_day=12,
                ),
                CreditCardModel(
                    id=OTHER_CARD_ID,
                    user_id=OTHER_USER_ID,
                    name="Inter",
                    total_limit=Decimal("1000.00"),
                    available_limit=Decimal("1000.00"),
                    closing_day=10,
                    due_day=20,
                ),
            ]
        )
        for user_id in (USER_ID, OTHER_USER_ID):
            for transaction_type in ("income", "expense"):
                session.add(CategoryModel(user_id=user_id, name="Outros", type=transaction_type))
        await session.commit()


@pytest.fixture
def insert_card_expense(session_factory) -> Callable:
    """
    Write a credit-card expense with a core INSERT.

    Core statements skip the ORM insert guard, reproducing rows written
    before the guard existed.
    """
    async def _insert(
        transaction_id: str,
        card_id: str = CARD_ID,
        amount: str = "150.00",
        description: str = "Market",
        user_id: str = USER_ID,
        on: date = date(2025, 9, 1),
    ) -> str:
        async with session_factory() as session:
            await session.execute(
                insert(TransactionModel.__table__).values(
                    id=transaction_id,
                    user_id=user_id,
                    type="expense",
                    amount=Decimal(amount),
                    date=on,
                    description=description,
                    credit_card_id=card_id,
                    created_at=datetime.utcnow(),
                )
            )
            await session.commit()
        return transaction_id

    return _insert


# =============================================================================
# Auth Fixtures
# =============================================================================

def make_token(user_id: str, audience: str | None = None, secret: str | None = None) -> str:
    claims = {
        "sub": user_id,
        "aud": audience or settings.jwt_audience,
        "exp": datetime.utcnow() + timedelta(minutes=5),
    }
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(ADMIN_ID)}"}


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(USER_ID)}"}


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(session_factory, seeded) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the in-memory database.

    Every request gets its own session, like the production dependency.
    """
    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
