"""SQLAlchemy ORM models for ledger and credit-card entities."""

from datetime import date as date_type, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def _uuid() -> str:
    return str(uuid4())


Money = Numeric(12, 2)


class UserModel(Base):
    """Application user."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )


class CategoryModel(Base):
    """User-defined transaction category."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)


class AccountModel(Base):
    """Bank account holding regular transactions."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class GoalModel(Base):
    """Savings goal."""

    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    current_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))


class CreditCardModel(Base):
    """Credit card with derived limit usage."""

    __tablename__ = "credit_cards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    total_limit: Mapped[Decimal] = mapped_column(Money, nullable=False)
    used_limit: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    available_limit: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    closing_day: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    bills: Mapped[list["CreditCardBillModel"]] = relationship(
        "CreditCardBillModel",
        back_populates="card",
        cascade="all, delete-orphan",
        order_by="CreditCardBillModel.period_end",
    )

    __table_args__ = (
        CheckConstraint("total_limit >= 0", name="ck_credit_card_total_limit"),
        CheckConstraint("closing_day BETWEEN 1 AND 31", name="ck_credit_card_closing_day"),
        CheckConstraint("due_day BETWEEN 1 AND 31", name="ck_credit_card_due_day"),
    )


class TransactionModel(Base):
    """
    Generic ledger entry.

    Credit-card expenses are rejected on insert; see
    ``infrastructure.database.guards``.
    """

    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    account_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    )
    credit_card_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("credit_cards.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    goal_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("goals.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    credit_card: Mapped["CreditCardModel | None"] = relationship("CreditCardModel")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transaction_type"),
    )


class CreditCardPurchaseModel(Base):
    """Purchase charged to a credit card."""

    __tablename__ = "credit_card_purchases"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    card_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("credit_cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    purchase_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    installments: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    installment_amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    is_installment: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Back-reference only: the source transaction is deleted after migration
    transaction_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    __table_args__ = (
        UniqueConstraint("transaction_id", name="uq_credit_card_purchase_transaction"),
        CheckConstraint("amount > 0", name="ck_purchase_amount_positive"),
        CheckConstraint("installments >= 1", name="ck_purchase_installments"),
    )


class CreditCardBillModel(Base):
    """Billing cycle of a credit card."""

    __tablename__ = "credit_card_bills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    card_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("credit_cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    period_start: Mapped[date_type] = mapped_column(Date, nullable=False)
    period_end: Mapped[date_type] = mapped_column(Date, nullable=False)
    due_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    paid_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    remaining_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    card: Mapped["CreditCardModel"] = relationship(
        "CreditCardModel",
        back_populates="bills",
    )

    __table_args__ = (
        UniqueConstraint("card_id", "period_end", name="uq_credit_card_bill_period"),
        CheckConstraint("remaining_amount >= 0", name="ck_bill_remaining_non_negative"),
    )
