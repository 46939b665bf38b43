"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["CREDIT_CARD_EXPENSE_CONFLICT"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Credit card expenses must be created as credit card purchases."],
    )
    details: str | None = Field(
        None,
        description="Underlying cause, for storage failures",
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "FORBIDDEN",
                    "message": "Admin access required",
                    "request_id": "abc123",
                }
            ]
        }
    }
