"""Admin endpoints for repairing misfiled credit-card expenses."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cardledger.application.services import CreditCardRepairService
from cardledger.core.dependencies import get_repair_service, require_admin
from cardledger.presentation.schemas import (
    ErrorResponseSchema,
    RepairActionSchema,
    RepairCheckResponseSchema,
    RepairResultSchema,
    RepairRunResponseSchema,
)

repair_router = APIRouter(
    prefix="/admin/credit-card-transactions",
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
        403: {"model": ErrorResponseSchema, "description": "Admin access required"},
        500: {"model": ErrorResponseSchema, "description": "Storage failure"},
    },
)


@repair_router.get(
    "",
    response_model=RepairCheckResponseSchema,
    summary="List Misfiled Credit Card Expenses",
    description="""Lists credit card expenses stored as plain transactions""",
)
async def check_credit_card_transactions(
    repair_service: Annotated[CreditCardRepairService, Depends(get_repair_service)],
) -> RepairCheckResponseSchema:
    response = await repair_service.check()

    return RepairCheckResponseSchema(
        transactions_to_fix=response.transactions_to_fix,
        transactions=response.transactions,
    )


@repair_router.post(
    "",
    response_model=RepairRunResponseSchema,
    summary="Fix Misfiled Credit Card Expenses",
    description="""
    Migrates every flagged transaction into a credit card purchase,
    regenerates the affected bills and recalculates card limits.

    Per-transaction failures are reported in `result.errors` and do not
    stop the run.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Unknown action"},
    },
)
async def fix_credit_card_transactions(
    request: RepairActionSchema,
    repair_service: Annotated[CreditCardRepairService, Depends(get_repair_service)],
) -> RepairRunResponseSchema:
    response = await repair_service.execute(request.action)

    return RepairRunResponseSchema(
        success=True,
        result=RepairResultSchema(
            fixed_transactions=response.fixed_transactions,
            created_purchases=response.created_purchases,
            errors=response.errors,
        ),
    )
