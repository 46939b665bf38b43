"""Transaction creation Pydantic schemas."""

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateTransactionSchema(BaseModel):
    """
    Schema for POST /v1/transactions request body.

    Required fields are checked by the service so that missing ones are
    reported together in a single message.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "5f0c8d1e-6a0b-4c57-9d0e-1c2b3a4d5e6f",
                    "type": "expense",
                    "amount": 89.9,
                    "description": "Mercado",
                    "date": "2025-09-23",
                    "category": "Alimentação",
                    "credit_card_id": "0b7e5a62-3c7d-4f0e-8a5b-2d9c1e4f6a7b",
                }
            ]
        }
    )

    user_id: Optional[str] = Field(None, description="Owner of the transaction")
    type: Optional[str] = Field(None, description="income or expense", examples=["expense"])
    amount: Optional[Decimal] = Field(None, description="Positive amount", examples=[150.0])
    date: Optional[str] = Field(
        None,
        description="YYYY-MM-DD or ISO 8601 datetime; defaults to today",
    )
    description: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[str] = Field(None, description="Category name, resolved per user")
    goal_id: Optional[str] = Field(None, description="Savings goal credited by an income")
    account_id: Optional[str] = None
    credit_card_id: Optional[str] = Field(
        None,
        description="Expenses with a card are recorded as credit card purchases",
    )


class CreateTransactionResponseSchema(BaseModel):
    """Schema for POST /v1/transactions response."""

    success: bool = True
    type: Literal["transaction", "credit_card_purchase"]
    transaction_id: Optional[str] = None
    purchase_id: Optional[str] = None
    data: dict[str, Any]
