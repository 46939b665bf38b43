"""Credit-card transaction repair Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class RepairActionSchema(BaseModel):
    """Schema for POST /v1/admin/credit-card-transactions request body."""

    action: Optional[str] = Field(None, description="Only 'fix' is supported", examples=["fix"])


class FlaggedCardSchema(BaseModel):
    name: str
    user_id: str


class FlaggedTransactionSchema(BaseModel):
    """A credit-card expense still stored as a transaction."""

    id: str
    description: str
    amount: float
    date: str
    credit_card_id: str
    category_id: Optional[str] = None
    user_id: str
    credit_card: FlaggedCardSchema


class RepairCheckResponseSchema(BaseModel):
    """Schema for GET /v1/admin/credit-card-transactions response."""

    transactions_to_fix: int = Field(..., ge=0)
    transactions: List[FlaggedTransactionSchema]


class RepairResultSchema(BaseModel):
    fixed_transactions: int = Field(..., ge=0)
    created_purchases: int = Field(..., ge=0)
    errors: List[str]


class RepairRunResponseSchema(BaseModel):
    """Schema for POST /v1/admin/credit-card-transactions response."""

    success: bool = True
    result: RepairResultSchema
