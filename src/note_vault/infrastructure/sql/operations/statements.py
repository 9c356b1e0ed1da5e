"""
Built statement types returned by the query builder.

A built statement is plain data: SQL text with named placeholders plus the
values to bind. The execution engine runs it; nothing else interprets it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Statement:
    """SQL text and its bound parameters."""

    sql: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UniquenessCheck:
    """Existence check for one unique constraint ahead of a write."""

    columns: Tuple[str, ...]
    statement: Statement


@dataclass(frozen=True)
class SelectPlan:
    """
    A SELECT statement and the result keys holding ciphertext.

    Attributes:
        statement: The SELECT to run
        encrypted_keys: Result row keys to decrypt before returning rows
    """

    table: str
    statement: Statement
    encrypted_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WritePlan:
    """
    An INSERT, UPDATE or DELETE statement with its uniqueness checks.

    Checks must all come back empty before the statement is executed.
    """

    table: str
    operation: str
    statement: Statement
    checks: Tuple[UniquenessCheck, ...] = ()
