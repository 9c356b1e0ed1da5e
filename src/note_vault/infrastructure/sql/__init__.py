"""
SQL module for centralized SQL generation.

Reusable utilities for building SQL statements with proper identifier
quoting, named parameter binding and SQLite-specific syntax. Statement
builders live in :mod:`note_vault.infrastructure.sql.operations`.
"""

from .core.identifier import qualify_column, quote_identifier
from .core.parameters import ParameterSet
from .dialects.sqlite import SQLiteDialect

__all__ = [
    "quote_identifier",
    "qualify_column",
    "ParameterSet",
    "SQLiteDialect",
]
