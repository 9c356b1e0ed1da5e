"""
Generic CRUD repository over registered tables.

This is the contract exposed to collaborators (request handlers, CLI):
``init_schema``, ``create``, ``read``, ``update``, ``delete`` and ``exists``.
Every call validates its identifiers, builds a parameterized statement,
runs it, and decrypts what comes back.

Failures are raised to the caller unchanged: SchemaError, ValidationError,
UniquenessError, EncryptionError or StoreError.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from note_vault.exceptions import UniquenessError
from note_vault.infrastructure.crypto import FieldCipher
from note_vault.infrastructure.schema.registry import SchemaRegistry
from note_vault.infrastructure.sql.operations import QueryBuilder, WritePlan
from note_vault.io.store.engine import ExecutionEngine
from note_vault.utils.logging import get_logger

from .models import DeleteResult, InsertResult, UpdateResult

logger = get_logger(__name__)


class TableRepository:
    """
    Database access layer for every table in the registry.

    Attributes:
        registry: Immutable table definitions
        builder: Statement builder bound to the registry and cipher
        executor: Execution engine bound to the shared SQLAlchemy engine

    Example:
        >>> repo = TableRepository(registry, ExecutionEngine(engine, cipher), cipher)
        >>> repo.init_schema()
        >>> repo.create("USERS", {"user_code": "abc123"})
        InsertResult(inserted_id=1, rows_affected=1)
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        executor: ExecutionEngine,
        cipher: FieldCipher,
    ) -> None:
        self.registry = registry
        self.executor = executor
        self.builder = QueryBuilder(registry, cipher)

    def init_schema(self) -> List[str]:
        """Create every registered table if missing; returns the DDL run."""
        statements = self.builder.create_schema()
        self.executor.execute_script(self.builder.create_schema_script())
        logger.info("schema.initialized", tables=self.registry.table_names())
        return statements

    def create(self, table: str, data: Mapping[str, Any]) -> InsertResult:
        """
        Insert one row.

        Raises:
            UniquenessError: If a declared unique combination already exists
        """
        plan = self.builder.insert(table, data)
        self._check_uniqueness(plan)
        result = self.executor.run(plan.statement)
        logger.info(
            "record.created",
            table=plan.table,
            columns=sorted(data),
            inserted_id=result.last_row_id,
        )
        return InsertResult(inserted_id=result.last_row_id, rows_affected=result.rows_affected)

    def read(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Select rows, decrypting encrypted columns (joined ones included).

        Args:
            table: Base table
            columns: Plain fields or ``OTHER_TABLE.field`` references; all
                base columns when omitted
            where: Equality filter
        """
        plan = self.builder.select(table, columns, where)
        rows = self.executor.fetch_all(plan.statement)
        rows = self.executor.decrypt_rows(rows, plan.encrypted_keys)
        logger.debug("records.read", table=plan.table, row_count=len(rows))
        return rows

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: Optional[Mapping[str, Any]],
    ) -> UpdateResult:
        """Update matching rows; an empty where clause is rejected."""
        plan = self.builder.update(table, data, where)
        self._check_uniqueness(plan)
        result = self.executor.run(plan.statement)
        logger.info(
            "record.updated",
            table=plan.table,
            columns=sorted(data),
            rows_affected=result.rows_affected,
        )
        return UpdateResult(rows_affected=result.rows_affected)

    def delete(self, table: str, where: Optional[Mapping[str, Any]]) -> DeleteResult:
        """Delete matching rows; an empty where clause is rejected."""
        plan = self.builder.delete(table, where)
        result = self.executor.run(plan.statement)
        logger.info("record.deleted", table=plan.table, rows_affected=result.rows_affected)
        return DeleteResult(rows_affected=result.rows_affected)

    def exists(self, table: str, where: Optional[Mapping[str, Any]] = None) -> bool:
        """Whether at least one row matches *where*."""
        return self.executor.fetch_exists(self.builder.exists(table, where))

    def _check_uniqueness(self, plan: WritePlan) -> None:
        # Check-then-write is not atomic; the UNIQUE clause in the DDL makes
        # the store reject a concurrent duplicate with StoreError.
        for check in plan.checks:
            if self.executor.fetch_exists(check.statement):
                logger.warning(
                    "record.duplicate_rejected",
                    table=plan.table,
                    operation=plan.operation,
                    constraint=",".join(check.columns),
                )
                raise UniquenessError(
                    "Duplicate value for unique constraint",
                    table=plan.table,
                    columns=check.columns,
                )


__all__ = ["TableRepository"]
