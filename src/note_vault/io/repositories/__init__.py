"""Repositories exposing the CRUD contract."""

from .models import DeleteResult, InsertResult, UpdateResult
from .table_repository import TableRepository

__all__ = [
    "TableRepository",
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
]
