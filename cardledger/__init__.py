"""
Card Ledger - Credit-Card Transaction Service

A FastAPI-based service that creates transactions and credit-card
purchases on behalf of external integrations, and repairs credit-card
expenses that were misfiled as generic transactions.
"""

__version__ = "0.1.0"
