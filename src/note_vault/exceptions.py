"""
Exception hierarchy for the NoteVault data layer.

Every failure raised by the schema registry, the query builder, the codecs
and the execution engine derives from :class:`NoteVaultError`. Messages carry
enough context (table, column, constraint) for callers to log and react, but
never bound parameter values or the encryption key.
"""

from typing import Optional, Sequence


def _with_context(message: str, **context: Optional[str]) -> str:
    """Append ``(key='value', ...)`` context to an error message."""
    context_parts = [f"{key}='{value}'" for key, value in context.items() if value]
    if context_parts:
        return f"{message} ({', '.join(context_parts)})"
    return message


class NoteVaultError(Exception):
    """Base exception for all data layer errors."""

    pass


class SchemaError(NoteVaultError):
    """
    Raised for unknown tables, unknown columns or invalid join targets.

    Also raised when a table registry fails its load-time checks. This is a
    programmer or configuration error and is not recoverable by retrying.

    Args:
        message: Error description
        table: Table the offending reference was resolved against (optional)
        column: The offending column reference (optional)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ):
        self.table = table
        self.column = column
        super().__init__(_with_context(message, table=table, column=column))


class ValidationError(NoteVaultError):
    """
    Raised when a mutating call is malformed, e.g. an update or delete
    without a where clause.
    """

    def __init__(self, message: str, table: Optional[str] = None):
        self.table = table
        super().__init__(_with_context(message, table=table))


class EncryptionError(NoteVaultError):
    """Raised when an encrypted value cannot be decoded or decrypted."""

    pass


class UniquenessError(NoteVaultError):
    """
    Raised when a write would duplicate a declared unique combination.

    Args:
        message: Error description
        table: Table holding the constraint
        columns: Columns of the violated constraint
    """

    def __init__(self, message: str, table: str, columns: Sequence[str]):
        self.table = table
        self.columns = tuple(columns)
        super().__init__(
            _with_context(message, table=table, constraint=",".join(self.columns))
        )


class StoreError(NoteVaultError):
    """
    Raised when the underlying store fails to execute a statement.

    Carries the failing statement text; bound parameter values are never
    included in the message.
    """

    def __init__(self, message: str, statement: Optional[str] = None):
        self.statement = statement
        super().__init__(message)


__all__ = [
    "NoteVaultError",
    "SchemaError",
    "ValidationError",
    "EncryptionError",
    "UniquenessError",
    "StoreError",
]
