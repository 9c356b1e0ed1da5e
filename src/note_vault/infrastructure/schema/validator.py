"""Column reference validation against the schema registry.

Every identifier that reaches statement construction passes through
:class:`Validator` first. Plain references name a column of the base table;
dotted references (``OTHER_TABLE.field``) name a column of a table that the
base table points at through a declared foreign key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from note_vault.exceptions import SchemaError

from .core import ALL_COLUMNS, ColumnDef, TableDef
from .registry import SchemaRegistry


@dataclass(frozen=True)
class JoinedReference:
    """A resolved dotted reference and the foreign key that reaches it."""

    table: str
    field: str
    via: ColumnDef

    @property
    def qualified(self) -> str:
        return f"{self.table}.{self.field}"


def is_dotted(reference: str) -> bool:
    return "." in reference


class Validator:
    """Checks requested table and column references against the registry."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def validate(self, table_name: str, column_refs: Iterable[str] = ()) -> TableDef:
        """
        Validate *column_refs* for *table_name*.

        Returns:
            The base table definition

        Raises:
            SchemaError: "unknown table", "unknown column" or "invalid join target"
        """
        table = self.registry.lookup(table_name)
        for ref in column_refs:
            if is_dotted(ref):
                self.resolve_join(table, ref)
            elif ref != ALL_COLUMNS and not table.has_column(ref):
                raise SchemaError("unknown column", table=table.name, column=ref)
        return table

    def resolve_join(self, table: TableDef, reference: str) -> JoinedReference:
        other_name, _, field = reference.partition(".")
        if not other_name or not field or is_dotted(field):
            raise SchemaError("invalid join target", table=table.name, column=reference)
        via = table.foreign_key_to(other_name)
        if via is None:
            raise SchemaError("invalid join target", table=table.name, column=reference)
        other = self.registry.lookup(other_name)
        if not other.has_column(field):
            raise SchemaError("unknown column", table=other.name, column=field)
        return JoinedReference(table=other.name, field=field, via=via)

    def split_references(
        self, table_name: str, column_refs: Iterable[str]
    ) -> Tuple[List[str], List[JoinedReference]]:
        """Split references into base fields and resolved joined references.

        ``"*"`` expands to every column of the base table.
        """
        table = self.validate(table_name)
        base: List[str] = []
        joined: List[JoinedReference] = []
        for ref in column_refs:
            if ref == ALL_COLUMNS:
                base.extend(f for f in table.field_names if f not in base)
            elif is_dotted(ref):
                joined.append(self.resolve_join(table, ref))
            elif table.has_column(ref):
                if ref not in base:
                    base.append(ref)
            else:
                raise SchemaError("unknown column", table=table.name, column=ref)
        return base, joined


__all__ = ["Validator", "JoinedReference", "is_dotted"]
