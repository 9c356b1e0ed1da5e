"""
Execution engine for built statements.

Runs statements against the embedded SQLite store through a shared
SQLAlchemy engine, wraps driver failures as :class:`StoreError`, and
decrypts result rows for the select path.

Each call runs in its own connection and commits on success; there are no
multi-statement transactions at this layer.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

import sqlalchemy as sa
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from note_vault.exceptions import StoreError
from note_vault.infrastructure.crypto import FieldCipher
from note_vault.infrastructure.sql.operations.statements import Statement
from note_vault.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a write statement."""

    last_row_id: Optional[int]
    rows_affected: int


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the shared SQLAlchemy engine for the embedded store.

    Foreign key enforcement is switched on for every new SQLite connection so
    that ``ON DELETE CASCADE`` clauses take effect.
    """
    engine = sa.create_engine(database_url, echo=echo)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def split_script(script: str) -> List[str]:
    """Split a DDL script on ``;`` into non-empty statements."""
    return [part.strip() for part in script.split(";") if part.strip()]


class ExecutionEngine:
    """
    Submits built statements to the store.

    Example:
        >>> engine = ExecutionEngine(create_store_engine("sqlite://"), cipher)
        >>> engine.execute_script('CREATE TABLE IF NOT EXISTS "T" ("a" TEXT)')
        >>> engine.fetch_all(Statement('SELECT "a" FROM "T"'))
        []
    """

    def __init__(self, engine: Engine, cipher: FieldCipher):
        self.engine = engine
        self.cipher = cipher

    @contextmanager
    def _translate_errors(self, sql: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            # The wrapped DB-API error carries the driver message but not the
            # bound parameters; SQLAlchemy's own message would include them.
            orig = getattr(exc, "orig", None)
            message = str(orig) if orig is not None else type(exc).__name__
            logger.error("store.statement_failed", statement=sql, error=message)
            raise StoreError(message, statement=sql) from orig

    def execute_script(self, script: str) -> None:
        """Run a ``;``-separated DDL script in a single transaction."""
        statements = split_script(script)
        with self.engine.begin() as conn:
            for sql in statements:
                with self._translate_errors(sql):
                    conn.exec_driver_sql(sql)
        logger.info("store.script_executed", statement_count=len(statements))

    def fetch_all(self, statement: Statement) -> List[Dict[str, Any]]:
        """Run a SELECT and return rows as dictionaries."""
        with self._translate_errors(statement.sql):
            with self.engine.connect() as conn:
                result = conn.execute(sa.text(statement.sql), statement.params)
                return [dict(row._mapping) for row in result]

    def fetch_exists(self, statement: Statement) -> bool:
        """Run an existence query and report whether any row came back."""
        with self._translate_errors(statement.sql):
            with self.engine.connect() as conn:
                result = conn.execute(sa.text(statement.sql), statement.params)
                return result.first() is not None

    def run(self, statement: Statement) -> ExecutionResult:
        """Run an INSERT, UPDATE or DELETE and commit."""
        with self._translate_errors(statement.sql):
            with self.engine.begin() as conn:
                result = conn.execute(sa.text(statement.sql), statement.params)
                return ExecutionResult(
                    last_row_id=result.lastrowid,
                    rows_affected=result.rowcount,
                )

    def decrypt_rows(
        self, rows: List[Dict[str, Any]], keys: Sequence[str]
    ) -> List[Dict[str, Any]]:
        """Decrypt the named keys of every row; NULLs pass through."""
        if not keys:
            return rows
        decrypted = []
        for row in rows:
            row = dict(row)
            for key in keys:
                if row.get(key) is not None:
                    row[key] = self.cipher.decrypt(row[key])
            decrypted.append(row)
        return decrypted


__all__ = [
    "ExecutionEngine",
    "ExecutionResult",
    "create_store_engine",
    "split_script",
]
