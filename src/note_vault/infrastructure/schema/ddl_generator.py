"""DDL SQL generation for registered tables.

Pure functions from table definitions to CREATE TABLE statements; nothing
here touches the store.
"""

from __future__ import annotations

from typing import List, Optional

from note_vault.infrastructure.sql.dialects.sqlite import SQLiteDialect

from .core import TableDef
from .registry import SchemaRegistry

STATEMENT_SEPARATOR = "; "


def generate_create_table_ddl(
    table: TableDef, dialect: Optional[SQLiteDialect] = None
) -> str:
    """Generate the CREATE TABLE IF NOT EXISTS statement for one table.

    Column clauses come first in declaration order, then one FOREIGN KEY
    clause per foreign column, then one UNIQUE clause per declared
    constraint.
    """
    dialect = dialect or SQLiteDialect()

    clauses: List[str] = [
        dialect.build_column_clause(
            col.field,
            col.type,
            primary=col.primary,
            auto_increment=col.auto_increment,
            default=col.default,
        )
        for col in table.columns
    ]
    clauses.extend(
        dialect.build_foreign_key(col.field, col.foreign.table, col.foreign.column)
        for col in table.foreign_columns
    )
    clauses.extend(dialect.build_unique(u.columns) for u in table.unique)
    return dialect.build_create_table(table.name, clauses)


def generate_schema_ddl(
    registry: SchemaRegistry, dialect: Optional[SQLiteDialect] = None
) -> List[str]:
    """One CREATE TABLE statement per registered table, in registration order."""
    return [generate_create_table_ddl(table, dialect) for table in registry]


def generate_schema_script(
    registry: SchemaRegistry, dialect: Optional[SQLiteDialect] = None
) -> str:
    """All CREATE TABLE statements joined for one-shot execution."""
    return STATEMENT_SEPARATOR.join(generate_schema_ddl(registry, dialect))


__all__ = [
    "generate_create_table_ddl",
    "generate_schema_ddl",
    "generate_schema_script",
    "STATEMENT_SEPARATOR",
]
