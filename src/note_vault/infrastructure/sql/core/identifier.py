"""
SQL identifier handling utilities.

Table and column names are validated against the schema registry before
they get here; quoting keeps reserved words and unusual names intact.
"""

from typing import Optional


def quote_identifier(name: str) -> str:
    """
    Quote a SQL identifier (table or column name).

    Internal double quotes are doubled.

    Examples:
        >>> quote_identifier("note_type_title")
        '"note_type_title"'
        >>> quote_identifier('odd"name')
        '"odd""name"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualify_column(column: str, table: Optional[str] = None) -> str:
    """
    Create a column reference optionally qualified by its table.

    Examples:
        >>> qualify_column("user_id", table="NOTES")
        '"NOTES"."user_id"'
        >>> qualify_column("user_id")
        '"user_id"'
    """
    quoted_column = quote_identifier(column)
    if table:
        return f"{quote_identifier(table)}.{quoted_column}"
    return quoted_column
