"""Pydantic schemas for API request/response validation."""

from .transaction import CreateTransactionSchema, CreateTransactionResponseSchema
from .repair import (
    RepairActionSchema,
    RepairCheckResponseSchema,
    RepairRunResponseSchema,
    RepairResultSchema,
    FlaggedTransactionSchema,
    FlaggedCardSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "CreateTransactionSchema",
    "CreateTransactionResponseSchema",
    "RepairActionSchema",
    "RepairCheckResponseSchema",
    "RepairRunResponseSchema",
    "RepairResultSchema",
    "FlaggedTransactionSchema",
    "FlaggedCardSchema",
    "ErrorResponseSchema",
]
