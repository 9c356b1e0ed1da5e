"""Table schema registry, validation and DDL generation.

The registry is immutable once built and is passed explicitly to the query
builder and repository; there is no module-level global registry.
"""

from .core import (
    ALL_COLUMNS,
    ColumnDef,
    ForeignReference,
    TableDef,
    UniqueConstraint,
    table_from_descriptor,
)
from .ddl_generator import (
    generate_create_table_ddl,
    generate_schema_ddl,
    generate_schema_script,
)
from .definitions import default_registry
from .loader import load_registry_from_yaml
from .registry import SchemaRegistry
from .validator import JoinedReference, Validator

__all__ = [
    "ALL_COLUMNS",
    "ColumnDef",
    "ForeignReference",
    "TableDef",
    "UniqueConstraint",
    "table_from_descriptor",
    "SchemaRegistry",
    "Validator",
    "JoinedReference",
    "default_registry",
    "load_registry_from_yaml",
    "generate_create_table_ddl",
    "generate_schema_ddl",
    "generate_schema_script",
]
