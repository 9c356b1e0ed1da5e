"""Core table schema types for NoteVault.

Descriptors are parsed once into frozen dataclasses; nothing here is mutated
after the registry is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from note_vault.exceptions import SchemaError

ALL_COLUMNS = "*"


@dataclass(frozen=True)
class ForeignReference:
    """Target of a foreign key, parsed from ``"Table.column"``."""

    table: str
    column: str

    @classmethod
    def parse(cls, reference: str, table: Optional[str] = None) -> "ForeignReference":
        parts = reference.split(".")
        if len(parts) != 2 or not all(parts):
            raise SchemaError(
                f"Foreign reference must look like 'Table.column', got '{reference}'",
                table=table,
            )
        return cls(table=parts[0], column=parts[1])

    def __str__(self) -> str:
        return f"{self.table}.{self.column}"


@dataclass(frozen=True)
class ColumnDef:
    """Definition of a single column in a table schema."""

    field: str
    type: str
    primary: bool = False
    auto_increment: bool = False
    default: Optional[str] = None
    foreign: Optional[ForeignReference] = None
    encrypted: bool = False
    hash_col: Optional[str] = None


@dataclass(frozen=True)
class UniqueConstraint:
    """A set of columns whose combined values must be unique per table."""

    columns: Tuple[str, ...]

    @classmethod
    def parse(cls, value: Union[str, Iterable[str]]) -> "UniqueConstraint":
        if isinstance(value, str):
            names = [name.strip() for name in value.split(",")]
        else:
            names = [str(name).strip() for name in value]
        return cls(columns=tuple(name for name in names if name))


@dataclass(frozen=True)
class TableDef:
    """Complete schema definition for one table."""

    name: str
    columns: Tuple[ColumnDef, ...] = ()
    unique: Tuple[UniqueConstraint, ...] = ()
    _by_field: Mapping[str, ColumnDef] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_field", MappingProxyType({c.field: c for c in self.columns})
        )

    @property
    def field_names(self) -> List[str]:
        return [c.field for c in self.columns]

    def has_column(self, name: str) -> bool:
        return name in self._by_field

    def column(self, name: str) -> ColumnDef:
        """Return the column named *name* or raise SchemaError."""
        try:
            return self._by_field[name]
        except KeyError:
            raise SchemaError("unknown column", table=self.name, column=name) from None

    @property
    def primary_key(self) -> Optional[ColumnDef]:
        return next((c for c in self.columns if c.primary), None)

    @property
    def encrypted_fields(self) -> List[str]:
        return [c.field for c in self.columns if c.encrypted]

    @property
    def hash_columns(self) -> Dict[str, str]:
        """Mapping of plaintext field to the sibling column holding its digest."""
        return {c.field: c.hash_col for c in self.columns if c.hash_col}

    @property
    def foreign_columns(self) -> List[ColumnDef]:
        return [c for c in self.columns if c.foreign is not None]

    def foreign_key_to(self, table: str) -> Optional[ColumnDef]:
        """Return the first column whose foreign reference targets *table*."""
        return next(
            (c for c in self.columns if c.foreign is not None and c.foreign.table == table),
            None,
        )


def column_from_descriptor(data: Mapping[str, Any], table: Optional[str] = None) -> ColumnDef:
    """Build a ColumnDef from a descriptor mapping (``field``, ``type``, flags...)."""
    if not isinstance(data, Mapping):
        raise SchemaError("Column descriptor must be a mapping", table=table)
    name = data.get("field")
    col_type = data.get("type")
    if not name or not col_type:
        raise SchemaError(
            "Column descriptor requires 'field' and 'type'", table=table, column=name
        )
    foreign = data.get("foreign")
    default = data.get("default")
    return ColumnDef(
        field=str(name),
        type=str(col_type),
        primary=bool(data.get("primary", False)),
        auto_increment=bool(data.get("auto_increment", False)),
        default=None if default is None else str(default),
        foreign=ForeignReference.parse(str(foreign), table=table) if foreign else None,
        encrypted=bool(data.get("encrypted", False)),
        hash_col=data.get("hash_col") or None,
    )


def table_from_descriptor(data: Mapping[str, Any]) -> TableDef:
    """
    Build a TableDef from the descriptor shape::

        {name, columns: [{field, type, primary?, auto_increment?, default?,
                          foreign?: "Table.column", encrypted?, hash_col?}],
         unique?: ["col_a,col_b", ...]}
    """
    if not isinstance(data, Mapping):
        raise SchemaError("Table descriptor must be a mapping")
    name = data.get("name")
    if not name:
        raise SchemaError("Table descriptor requires 'name'")
    columns = data.get("columns") or []
    if not isinstance(columns, list):
        raise SchemaError("'columns' must be a list", table=name)
    unique = data.get("unique") or []
    if isinstance(unique, str):
        unique = [unique]
    return TableDef(
        name=str(name),
        columns=tuple(column_from_descriptor(c, table=name) for c in columns),
        unique=tuple(UniqueConstraint.parse(u) for u in unique),
    )


__all__ = [
    "ALL_COLUMNS",
    "ForeignReference",
    "ColumnDef",
    "UniqueConstraint",
    "TableDef",
    "column_from_descriptor",
    "table_from_descriptor",
]
