"""
Result dataclasses for repository operations.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class InsertResult:
    """
    Result of a create call.

    Attributes:
        inserted_id: Row id generated by the store (the INTEGER primary key).
        rows_affected: Number of rows written.
    """

    inserted_id: Optional[int]
    rows_affected: int


@dataclass(frozen=True)
class UpdateResult:
    """Result of an update call."""

    rows_affected: int


@dataclass(frozen=True)
class DeleteResult:
    """Result of a delete call."""

    rows_affected: int
