"""
Unit Tests for the transaction creation entry point.

These tests verify:
1. Request validation and user lookup
2. Credit-card expenses are stored as purchases, never as transactions
3. Account, category and goal resolution for regular transactions
"""

from datetime import date
from decimal import Decimal

import pytest

from cardledger.application.dto import CreateTransactionRequest
from cardledger.domain.entities import Account, Category, Goal, TransactionType
from cardledger.domain.exceptions import (
    CardOwnershipException,
    CategoryNotResolvedException,
    InvalidTransactionRequestException,
)


def make_request(**overrides) -> CreateTransactionRequest:
    fields = {
        "user_id": "u1",
        "type": "expense",
        "amount": Decimal("50"),
        "date": "2025-09-23",
    }
    fields.update(overrides)
    return CreateTransactionRequest(**fields)


# =============================================================================
# Validation Tests
# =============================================================================

class TestCreateTransactionRequest:

    def test_reports_all_missing_fields_together(self):
        request = CreateTransactionRequest(user_id=None, type=None, amount=None)

        assert request.validate() == ["Missing required fields: type, amount, user_id"]

    def test_rejects_unknown_type_and_non_positive_amount(self):
        request = make_request(type="transfer", amount=Decimal("0"))

        assert request.validate() == [
            "type must be 'income' or 'expense'",
            "amount must be positive",
        ]

    def test_rejects_unparseable_date(self):
        assert make_request(date="23/09/2025").validate() == ["date must be an ISO 8601 date"]

    def test_keeps_date_part_of_datetime(self):
        request = make_request(date="2025-09-23T18:30:00.000Z")

        assert request.validate() == []
        assert request.effective_date == date(2025, 9, 23)

    def test_defaults_to_today(self):
        assert make_request(date=None).effective_date == date.today()

    @pytest.mark.parametrize(
        "type_,card,expected",
        [
            ("expense", "c1", True),
            ("expense", None, False),
            ("income", "c1", False),
        ],
    )
    def test_is_credit_card_purchase(self, type_, card, expected):
        assert make_request(type=type_, credit_card_id=card).is_credit_card_purchase is expected

    @pytest.mark.parametrize("card", ["", "   "])
    def test_blank_card_id_means_no_card(self, card):
        request = make_request(credit_card_id=card)

        assert request.credit_card_id is None
        assert request.is_credit_card_purchase is False

    def test_rejects_more_than_two_decimal_places(self):
        assert make_request(amount=Decimal("0.004")).validate() == [
            "amount must have at most 2 decimal places"
        ]

    def test_accepts_trailing_zeros_beyond_scale(self):
        assert make_request(amount=Decimal("12.500")).validate() == []

    def test_rejects_amount_wider_than_column(self):
        assert make_request(amount=Decimal("10000000000")).validate() == [
            "amount must be less than 10000000000"
        ]


# =============================================================================
# Credit Card Purchase Path
# =============================================================================

class TestCreditCardPurchasePath:

    @pytest.mark.asyncio
    async def test_card_expense_becomes_purchase(self, store, transaction_service, bill_generator):
        response = await transaction_service.create(make_request(credit_card_id="c1"))

        assert response.type == "credit_card_purchase"
        assert store.transactions == {}
        purchase = store.purchases[response.id]
        assert purchase.card_id == "c1"
        assert purchase.amount == Decimal("50")
        assert purchase.installments == 1
        assert purchase.is_installment is False
        assert purchase.transaction_id is None
        assert purchase.purchase_date == date(2025, 9, 23)
        assert purchase.description == "Compra via WhatsApp"
        assert response.data["id"] == purchase.id
        assert bill_generator.calls == ["c1"]

    @pytest.mark.asyncio
    async def test_category_resolved_by_name(self, store, transaction_service):
        category = Category(user_id="u1", name="Mercado", type=TransactionType.EXPENSE)
        store.categories[category.id] = category

        response = await transaction_service.create(
            make_request(credit_card_id="c1", category="  mercado ")
        )

        assert store.purchases[response.id].category_id == category.id

    @pytest.mark.asyncio
    async def test_card_of_another_user_is_forbidden(self, store, transaction_service):
        with pytest.raises(CardOwnershipException):
            await transaction_service.create(make_request(credit_card_id="c2"))

        assert store.purchases == {}

    @pytest.mark.asyncio
    async def test_unknown_card_is_forbidden(self, transaction_service):
        with pytest.raises(CardOwnershipException):
            await transaction_service.create(make_request(credit_card_id="missing"))

    @pytest.mark.asyncio
    async def test_bill_failure_keeps_purchase(self, store, transaction_service, bill_generator):
        bill_generator.fail = True

        response = await transaction_service.create(make_request(credit_card_id="c1"))

        assert response.id in store.purchases


# =============================================================================
# Regular Transaction Path
# =============================================================================

class TestRegularTransactionPath:

    @pytest.mark.asyncio
    async def test_invalid_request_is_rejected_before_lookup(self, transaction_service):
        with pytest.raises(InvalidTransactionRequestException) as exc_info:
            await transaction_service.create(make_request(amount=Decimal("-1")))

        assert exc_info.value.message == "amount must be positive"

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(self, transaction_service):
        with pytest.raises(InvalidTransactionRequestException) as exc_info:
            await transaction_service.create(make_request(user_id="ghost"))

        assert exc_info.value.message == "Invalid user_id"

    @pytest.mark.asyncio
    async def test_expense_without_card_uses_defaults(self, store, transaction_service):
        response = await transaction_service.create(make_request(description="Padaria"))

        assert response.type == "transaction"
        transaction = store.transactions[response.id]
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.credit_card_id is None
        assert store.categories[transaction.category_id].name == "Outros"
        account = store.accounts[transaction.account_id]
        assert account.is_default
        assert account.name == "Conta Principal"

    @pytest.mark.asyncio
    async def test_existing_default_account_is_reused(self, store, transaction_service):
        account = Account(user_id="u1", name="Itaú", is_default=True)
        store.accounts[account.id] = account

        response = await transaction_service.create(make_request())

        assert store.transactions[response.id].account_id == account.id
        assert len(store.accounts) == 1

    @pytest.mark.asyncio
    async def test_unknown_category_id_is_rejected(self, transaction_service):
        with pytest.raises(InvalidTransactionRequestException):
            await transaction_service.create(make_request(category_id="nope"))

    @pytest.mark.asyncio
    async def test_no_resolvable_category(self, store, transaction_service):
        store.categories.clear()

        with pytest.raises(CategoryNotResolvedException):
            await transaction_service.create(make_request(category="Lazer"))

        assert store.transactions == {}

    @pytest.mark.asyncio
    async def test_income_with_card_is_a_transaction(self, store, transaction_service):
        response = await transaction_service.create(
            make_request(type="income", credit_card_id="c1")
        )

        assert response.type == "transaction"
        assert store.transactions[response.id].credit_card_id == "c1"

    @pytest.mark.asyncio
    async def test_expense_with_blank_card_is_a_transaction(self, store, transaction_service):
        response = await transaction_service.create(make_request(credit_card_id=""))

        assert response.type == "transaction"
        assert store.transactions[response.id].credit_card_id is None
        assert store.purchases == {}

    @pytest.mark.asyncio
    async def test_income_with_card_of_another_user_is_forbidden(self, store, transaction_service):
        with pytest.raises(CardOwnershipException):
            await transaction_service.create(make_request(type="income", credit_card_id="c2"))

        assert store.transactions == {}

    @pytest.mark.asyncio
    async def test_income_with_unknown_card_is_forbidden(self, store, transaction_service):
        with pytest.raises(CardOwnershipException):
            await transaction_service.create(make_request(type="income", credit_card_id="missing"))

        assert store.transactions == {}

    @pytest.mark.asyncio
    async def test_income_credits_goal(self, store, transaction_service):
        goal = Goal(user_id="u1", name="Viagem", target_amount=Decimal("1000"))
        store.goals[goal.id] = goal

        response = await transaction_service.create(
            make_request(type="income", amount=Decimal("200"), goal_id=goal.id)
        )

        assert store.transactions[response.id].goal_id == goal.id
        assert store.goals[goal.id].current_amount == Decimal("200")

    @pytest.mark.asyncio
    async def test_goal_of_another_user_is_rejected(self, store, transaction_service):
        goal = Goal(user_id="u2", name="Carro", target_amount=Decimal("1000"))
        store.goals[goal.id] = goal

        with pytest.raises(InvalidTransactionRequestException):
            await transaction_service.create(make_request(type="income", goal_id=goal.id))

        assert store.goals[goal.id].current_amount == Decimal("0")
        assert store.transactions == {}
