"""Statement builders for the fixed CRUD shapes."""

from .builder import QueryBuilder
from .statements import SelectPlan, Statement, UniquenessCheck, WritePlan

__all__ = [
    "QueryBuilder",
    "Statement",
    "SelectPlan",
    "WritePlan",
    "UniquenessCheck",
]
