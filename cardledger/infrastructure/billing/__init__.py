"""Bill generation and limit recalculation backed by the database."""

from .bill_generator import SqlAlchemyBillGenerator
from .limit_recalculator import SqlAlchemyLimitRecalculator

__all__ = ["SqlAlchemyBillGenerator", "SqlAlchemyLimitRecalculator"]
