"""Transaction creation endpoint used by chat integrations."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cardledger.application.dto import CreateTransactionRequest
from cardledger.application.services import TransactionService
from cardledger.core.dependencies import get_transaction_service
from cardledger.presentation.schemas import (
    CreateTransactionResponseSchema,
    CreateTransactionSchema,
    ErrorResponseSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        403: {"model": ErrorResponseSchema, "description": "Card does not belong to the user"},
        500: {"model": ErrorResponseSchema, "description": "Storage failure"},
    },
)


@transactions_router.post(
    "",
    response_model=CreateTransactionResponseSchema,
    response_model_exclude_none=True,
    status_code=200,
    summary="Create Transaction",
    description="""
    Create an income or expense for a user.

    Expenses charged to a credit card are stored as credit card purchases
    and reported with `type: credit_card_purchase`.
    """,
)
async def create_transaction(
    request: CreateTransactionSchema,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> CreateTransactionResponseSchema:
    dto = CreateTransactionRequest(**request.model_dump())

    response = await transaction_service.create(dto)

    if response.is_purchase:
        return CreateTransactionResponseSchema(
            type=response.type,
            purchase_id=response.id,
            data=response.data,
        )

    return CreateTransactionResponseSchema(
        type=response.type,
        transaction_id=response.id,
        data=response.data,
    )
