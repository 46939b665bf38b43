"""Transaction service - creates entries on behalf of external integrations."""

import structlog

from cardledger.application.dto import CreateTransactionRequest, CreateTransactionResponse
from cardledger.core.config import settings
from cardledger.core.metrics import record_dependency_failure, record_transaction_created
from cardledger.domain.entities import Card, Purchase, Transaction, TransactionType
from cardledger.domain.exceptions import (
    CardOwnershipException,
    CategoryNotResolvedException,
    DependencyException,
    InvalidTransactionRequestException,
)
from cardledger.domain.interfaces import (
    AccountRepository,
    BillGenerator,
    CardRepository,
    CategoryRepository,
    GoalRepository,
    PurchaseRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository,
)

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for creating transactions.

    Credit-card expenses are always written as purchases; everything
    else goes to the transactions table.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        transaction_repository: TransactionRepository,
        purchase_repository: PurchaseRepository,
        card_repository: CardRepository,
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        account_repository: AccountRepository,
        goal_repository: GoalRepository,
        bill_generator: BillGenerator,
    ):
        self._uow = unit_of_work
        self._transaction_repo = transaction_repository
        self._purchase_repo = purchase_repository
        self._card_repo = card_repository
        self._user_repo = user_repository
        self._category_repo = category_repository
        self._account_repo = account_repository
        self._goal_repo = goal_repository
        self._bill_generator = bill_generator

    async def create(self, request: CreateTransactionRequest) -> CreateTransactionResponse:
        """
        Create a transaction or a credit-card purchase.

        Args:
            request: The creation request

        Returns:
            CreateTransactionResponse describing what was created

        Raises:
            InvalidTransactionRequestException: If validation fails
            CardOwnershipException: If the card is not the user's
            CategoryNotResolvedException: If no category can be found
            StorageException: If persistence fails
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionRequestException("; ".join(errors))

        user = await self._user_repo.get_by_id(request.user_id)
        if user is None:
            raise InvalidTransactionRequestException("Invalid user_id")

        log = logger.bind(user_id=request.user_id, type=request.type)

        if request.is_credit_card_purchase:
            log.info("credit_card_purchase_requested", card_id=request.credit_card_id)
            response = await self._create_purchase(request)
        else:
            log.info("transaction_requested")
            response = await self._create_transaction(request)

        record_transaction_created(response.type)
        log.info("entry_created", kind=response.type, entry_id=response.id)

        return response

    async def _get_owned_card(self, request: CreateTransactionRequest) -> Card:
        card = await self._card_repo.get_by_id(request.credit_card_id)
        if card is None or not card.owned_by(request.user_id):
            raise CardOwnershipException(request.credit_card_id, request.user_id)
        return card

    async def _create_purchase(self, request: CreateTransactionRequest) -> CreateTransactionResponse:
        card = await self._get_owned_card(request)

        category_id = request.category_id
        if category_id is None and request.category:
            category = await self._category_repo.find_by_name(
                request.user_id, request.category, TransactionType.EXPENSE
            )
            category_id = category.id if category else None

        purchase = Purchase.single(
            card_id=card.id,
            description=request.description or settings.integration_purchase_description,
            amount=request.amount,
            purchase_date=request.effective_date,
            category_id=category_id,
        )
        async with self._uow.atomic():
            await self._purchase_repo.add(purchase)
        await self._uow.commit()

        try:
            async with self._uow.atomic():
                await self._bill_generator.generate_bills(card.id)
            await self._uow.commit()
        except Exception as e:
            error = DependencyException("bill_generator", card.id, str(e))
            record_dependency_failure("bill_generator")
            logger.error("bill_generation_failed", card_id=card.id, error=error.message)

        return CreateTransactionResponse.from_purchase(purchase)

    async def _create_transaction(self, request: CreateTransactionRequest) -> CreateTransactionResponse:
        transaction_type = request.transaction_type

        credit_card_id = None
        if request.credit_card_id:
            credit_card_id = (await self._get_owned_card(request)).id

        account_id = request.account_id or await self._resolve_default_account(request.user_id)
        category_id = await self._resolve_category(request, transaction_type)

        goal_id = None
        if transaction_type == TransactionType.INCOME and request.goal_id:
            goal = await self._goal_repo.get_by_id(request.goal_id)
            if goal is None or goal.user_id != request.user_id:
                raise InvalidTransactionRequestException(f"Invalid goal_id: {request.goal_id}")
            goal_id = goal.id

        transaction = Transaction(
            user_id=request.user_id,
            type=transaction_type,
            amount=request.amount,
            date=request.effective_date,
            description=request.description or "",
            category_id=category_id,
            account_id=account_id,
            credit_card_id=credit_card_id,
            goal_id=goal_id,
        )

        async with self._uow.atomic():
            await self._transaction_repo.add(transaction)
            if goal_id is not None:
                goal = await self._goal_repo.add_progress(goal_id, transaction.amount)
                logger.info("goal_progress_updated", goal_id=goal_id, current_amount=str(goal.current_amount))

        await self._uow.commit()

        return CreateTransactionResponse.from_transaction(transaction)

    async def _resolve_default_account(self, user_id: str) -> str:
        account = await self._account_repo.get_default(user_id)
        if account is None:
            account = await self._account_repo.create_default(user_id, settings.default_account_name)
            logger.info("default_account_created", user_id=user_id, account_id=account.id)
        return account.id

    async def _resolve_category(
        self,
        request: CreateTransactionRequest,
        transaction_type: TransactionType,
    ) -> str:
        if request.category_id:
            category = await self._category_repo.get_by_id(request.category_id)
            if category is None:
                raise InvalidTransactionRequestException(f"Invalid category_id: {request.category_id}")
            return category.id

        for name in (request.category, settings.default_category_name):
            if not name:
                continue
            category = await self._category_repo.find_by_name(request.user_id, name, transaction_type)
            if category is not None:
                return category.id

        raise CategoryNotResolvedException(request.user_id, transaction_type.value)
