"""SQL dialect implementations."""

from .sqlite import SQLiteDialect

__all__ = ["SQLiteDialect"]
