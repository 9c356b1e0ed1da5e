"""Table schema registry for NoteVault.

The registry is built once at startup, checked for internal consistency, and
passed by reference to every component that needs table metadata.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping

from note_vault.exceptions import SchemaError

from .core import TableDef, table_from_descriptor


class SchemaRegistry:
    """
    Immutable lookup of table definitions by name.

    Example:
        >>> registry = SchemaRegistry.from_descriptors([
        ...     {"name": "USERS", "columns": [{"field": "user_id", "type": "INTEGER"}]}
        ... ])
        >>> registry.lookup("USERS").field_names
        ['user_id']
    """

    def __init__(self, tables: Iterable[TableDef]):
        by_name = {}
        for table in tables:
            if table.name in by_name:
                raise SchemaError("Table is registered twice", table=table.name)
            by_name[table.name] = table
        self._tables: Mapping[str, TableDef] = MappingProxyType(by_name)
        for table in self._tables.values():
            self._check_table(table)

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[Mapping[str, Any]]) -> "SchemaRegistry":
        return cls(table_from_descriptor(d) for d in descriptors)

    def lookup(self, table_name: str) -> TableDef:
        """Retrieve a table definition by name."""
        try:
            return self._tables[table_name]
        except KeyError:
            raise SchemaError("unknown table", table=table_name) from None

    def table_names(self) -> List[str]:
        """Registered table names in registration order."""
        return list(self._tables)

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._tables

    def __iter__(self) -> Iterator[TableDef]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)

    def _check_table(self, table: TableDef) -> None:
        seen = set()
        for col in table.columns:
            if col.field in seen:
                raise SchemaError("Column is declared twice", table=table.name, column=col.field)
            seen.add(col.field)

        if sum(1 for c in table.columns if c.primary) > 1:
            raise SchemaError("Only one primary key column is supported", table=table.name)

        for col in table.columns:
            if col.auto_increment and not col.primary:
                raise SchemaError(
                    "AUTOINCREMENT requires a primary key column",
                    table=table.name,
                    column=col.field,
                )
            if col.hash_col:
                if not table.has_column(col.hash_col):
                    raise SchemaError(
                        f"hash_col '{col.hash_col}' is not a declared column",
                        table=table.name,
                        column=col.field,
                    )
                if table.column(col.hash_col).encrypted:
                    raise SchemaError(
                        "hash_col must not itself be encrypted",
                        table=table.name,
                        column=col.hash_col,
                    )
            if col.foreign is not None:
                if col.foreign.table not in self._tables:
                    raise SchemaError(
                        f"Foreign reference '{col.foreign}' targets an unknown table",
                        table=table.name,
                        column=col.field,
                    )
                if not self._tables[col.foreign.table].has_column(col.foreign.column):
                    raise SchemaError(
                        f"Foreign reference '{col.foreign}' targets an unknown column",
                        table=table.name,
                        column=col.field,
                    )

        for constraint in table.unique:
            if not constraint.columns:
                raise SchemaError("Unique constraint has no columns", table=table.name)
            for name in constraint.columns:
                col = table.column(name)
                # Ciphertext uses a fresh IV per write; equality must go through the digest.
                if col.encrypted:
                    hint = f"; use '{col.hash_col}'" if col.hash_col else ""
                    raise SchemaError(
                        f"Unique constraint must not name an encrypted column{hint}",
                        table=table.name,
                        column=name,
                    )


__all__ = ["SchemaRegistry"]
