"""Data Transfer Objects for application layer."""

from .transaction import CreateTransactionRequest, CreateTransactionResponse
from .repair import RepairCheckResponse, RepairRunResponse

__all__ = [
    "CreateTransactionRequest",
    "CreateTransactionResponse",
    "RepairCheckResponse",
    "RepairRunResponse",
]
