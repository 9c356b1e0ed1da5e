"""
Query builder for the fixed CRUD statement shapes.

Turns a generic operation descriptor (table, columns, where, data) into
parameterized SQLite statements. Every identifier is checked by the
:class:`Validator` before it is quoted into SQL text; every value is bound
through a placeholder.

Encrypted columns are encrypted on the way in and flagged for decryption on
the way out. Columns with a ``hash_col`` get the SHA-256 digest of their
plaintext written to the sibling column, and declared unique constraints are
turned into existence checks that the repository runs before each write.

Known limitation: where-clause values on encrypted columns are encrypted
with a fresh IV, so they never equal the stored ciphertext. Equality lookups
on encrypted data must go through the hash column.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from note_vault.exceptions import SchemaError, ValidationError
from note_vault.infrastructure.crypto import FieldCipher, digest
from note_vault.infrastructure.schema.core import ALL_COLUMNS, ColumnDef, TableDef
from note_vault.infrastructure.schema.ddl_generator import (
    generate_schema_ddl,
    generate_schema_script,
)
from note_vault.infrastructure.schema.registry import SchemaRegistry
from note_vault.infrastructure.schema.validator import (
    JoinedReference,
    Validator,
    is_dotted,
)
from note_vault.infrastructure.sql.core.parameters import ParameterSet
from note_vault.infrastructure.sql.dialects.sqlite import SQLiteDialect
from note_vault.utils.logging import get_logger

from .statements import SelectPlan, Statement, UniquenessCheck, WritePlan

logger = get_logger(__name__)

JoinMap = Dict[str, str]

TARGET_ALIAS = "target"


class QueryBuilder:
    """
    Builds parameterized statements from operation descriptors.

    Example:
        >>> from note_vault.infrastructure.schema import default_registry
        >>> builder = QueryBuilder(default_registry(), FieldCipher("k" * 32))
        >>> plan = builder.select("USERS", ["user_id"], {"user_code": "abc123"})
        >>> plan.statement.sql
        'SELECT "USERS"."user_id" FROM "USERS" WHERE "USERS"."user_code" = :p_0'
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        cipher: FieldCipher,
        validator: Optional[Validator] = None,
        dialect: Optional[SQLiteDialect] = None,
    ):
        self.registry = registry
        self.cipher = cipher
        self.validator = validator or Validator(registry)
        self.dialect = dialect or SQLiteDialect()

    # -- DDL -----------------------------------------------------------------

    def create_schema(self) -> List[str]:
        """One CREATE TABLE IF NOT EXISTS statement per registered table."""
        return generate_schema_ddl(self.registry, self.dialect)

    def create_schema_script(self) -> str:
        """The CREATE TABLE statements joined for one-shot execution."""
        return generate_schema_script(self.registry, self.dialect)

    # -- reads ---------------------------------------------------------------

    def select(
        self,
        table_name: str,
        columns: Optional[Sequence[str]] = None,
        where: Optional[Mapping[str, Any]] = None,
    ) -> SelectPlan:
        """
        Build a SELECT with optional LEFT JOINs for dotted column references.

        Joined columns are projected under their own field name, so result
        rows are flat. ``None`` or ``["*"]`` selects every base column.
        """
        columns = list(columns) if columns else [ALL_COLUMNS]
        where = dict(where or {})
        table = self.validator.validate(table_name, [*columns, *where])
        base, joined = self.validator.split_references(table.name, columns)

        params = ParameterSet()
        joins: JoinMap = {}
        projections: List[str] = []
        encrypted_keys: List[str] = []
        result_keys = set()

        def add_result_key(key: str, column: ColumnDef, ref: str) -> None:
            if key in result_keys:
                raise SchemaError("ambiguous result column", table=table.name, column=ref)
            result_keys.add(key)
            if column.encrypted:
                encrypted_keys.append(key)

        for name in base:
            projections.append(self.dialect.qualify(name, table.name))
            add_result_key(name, table.column(name), name)

        for ref in joined:
            self._add_join(table, ref, joins)
            projections.append(
                f"{self.dialect.qualify(ref.field, ref.table)} AS {self.dialect.quote(ref.field)}"
            )
            other = self.registry.lookup(ref.table)
            add_result_key(ref.field, other.column(ref.field), ref.qualified)

        conditions = self._conditions(table, where, params, joins)
        sql = self.dialect.build_select(
            table.name, projections, joins=list(joins.values()), conditions=conditions
        )
        return SelectPlan(
            table=table.name,
            statement=Statement(sql, params.values),
            encrypted_keys=tuple(encrypted_keys),
        )

    def exists(
        self,
        table_name: str,
        where: Optional[Mapping[str, Any]] = None,
        exclude: Optional[Mapping[str, Any]] = None,
    ) -> Statement:
        """
        Build ``SELECT 1 ... LIMIT 1`` for an existence check.

        Args:
            table_name: Base table
            where: Equality filter; dotted keys add the needed joins
            exclude: Rows matching this filter are left out (``AND NOT (...)``)
        """
        where = dict(where or {})
        exclude = dict(exclude or {})
        table = self.validator.validate(table_name, [*where, *exclude])

        params = ParameterSet()
        joins: JoinMap = {}
        conditions = self._conditions(table, where, params, joins)
        excluded = self._conditions(table, exclude, params, joins)
        sql = self.dialect.build_select(
            table.name,
            ["1"],
            joins=list(joins.values()),
            conditions=conditions,
            exclude=excluded,
            limit=1,
        )
        return Statement(sql, params.values)

    # -- writes --------------------------------------------------------------

    def insert(self, table_name: str, data: Mapping[str, Any]) -> WritePlan:
        """
        Build an INSERT, filling hash columns and encrypting flagged columns.

        Uniqueness checks are computed from the row after hash substitution.
        """
        data = dict(data)
        table = self._validate_plain(table_name, data)

        row = self._apply_hashes(table, data)
        checks = [
            self._insert_check(table, columns, match)
            for columns, match, _ in self._constraint_matches(table, row)
        ]
        # Empty strings are encrypted like any other value; only None stays NULL
        row = self._encrypt_row(table, row)

        params = ParameterSet()
        columns = list(row)
        placeholders = params.bind_all([row[c] for c in columns])
        sql = self.dialect.build_insert(table.name, columns, placeholders)
        return WritePlan(
            table=table.name,
            operation="insert",
            statement=Statement(sql, params.values),
            checks=tuple(checks),
        )

    def update(
        self,
        table_name: str,
        data: Mapping[str, Any],
        where: Optional[Mapping[str, Any]],
    ) -> WritePlan:
        """
        Build an UPDATE. An empty where clause is rejected before anything else.

        Uniqueness checks cover every constraint touched by *data*. The rows
        being updated are excluded from each check; constraint columns not in
        *data* keep their current value and are matched against the target
        rows through a correlated subquery. A second check per constraint
        catches targets that would collide with each other.

        A non-NULL where value on an encrypted column never matches stored
        ciphertext, so such an update touches no rows and gets no checks.
        """
        if not where:
            raise ValidationError("Update requires a where clause", table=table_name)
        if not data:
            raise ValidationError("Update requires at least one column to set", table=table_name)
        data = dict(data)
        where = dict(where)
        table = self._validate_plain(table_name, data, where)

        row = self._apply_hashes(table, data)
        checks: List[UniquenessCheck] = []
        if self._filters_on_ciphertext(table, where):
            logger.warning(
                "query.uniqueness_check_skipped",
                table=table.name,
                reason="where clause compares an encrypted column",
            )
        else:
            for columns, match, unresolved in self._constraint_matches(
                table, row, correlate=True
            ):
                checks.append(self._update_check(table, columns, match, unresolved, where))
                checks.append(self._target_collision_check(table, columns, unresolved, where))
        # Empty strings are encrypted like any other value; only None stays NULL
        row = self._encrypt_row(table, row)

        params = ParameterSet()
        assignments = [
            f"{self.dialect.quote(name)} = {params.bind(value)}"
            for name, value in row.items()
        ]
        conditions = self._conditions(table, where, params)
        sql = self.dialect.build_update(table.name, assignments, conditions)
        return WritePlan(
            table=table.name,
            operation="update",
            statement=Statement(sql, params.values),
            checks=tuple(checks),
        )

    def delete(self, table_name: str, where: Optional[Mapping[str, Any]]) -> WritePlan:
        """Build a DELETE. An empty where clause is rejected."""
        if not where:
            raise ValidationError("Delete requires a where clause", table=table_name)
        where = dict(where)
        table = self._validate_plain(table_name, where)

        params = ParameterSet()
        conditions = self._conditions(table, where, params)
        sql = self.dialect.build_delete(table.name, conditions)
        return WritePlan(
            table=table.name,
            operation="delete",
            statement=Statement(sql, params.values),
        )

    # -- helpers -------------------------------------------------------------

    def _validate_plain(self, table_name: str, *mappings: Mapping[str, Any]) -> TableDef:
        """Validate keys of write descriptors; joins are not allowed in writes."""
        keys = [key for mapping in mappings for key in mapping]
        table = self.validator.validate(table_name, [k for k in keys if not is_dotted(k)])
        for key in keys:
            if is_dotted(key) or key == ALL_COLUMNS:
                raise SchemaError(
                    "joined references are not allowed in writes", table=table.name, column=key
                )
        return table

    def _add_join(self, table: TableDef, ref: JoinedReference, joins: JoinMap) -> None:
        if ref.table in joins:
            return
        # The foreign reference names the target key column
        joins[ref.table] = self.dialect.build_left_join(
            ref.table, ref.via.foreign.column, table.name, ref.via.field
        )

    def _conditions(
        self,
        table: TableDef,
        where: Mapping[str, Any],
        params: ParameterSet,
        joins: Optional[JoinMap] = None,
        alias: Optional[str] = None,
    ) -> List[str]:
        """Equality conditions for *where*; *alias* renames the base table."""
        conditions = []
        for key, value in where.items():
            if is_dotted(key):
                if joins is None:
                    raise SchemaError(
                        "joined references are not allowed here", table=table.name, column=key
                    )
                ref = self.validator.resolve_join(table, key)
                self._add_join(table, ref, joins)
                owner = self.registry.lookup(ref.table)
                column = owner.column(ref.field)
            else:
                owner = table
                column = table.column(key)

            qualifier = alias if alias and owner is table else owner.name
            column_sql = self.dialect.qualify(column.field, qualifier)
            if value is None:
                conditions.append(self.dialect.build_condition(column_sql, None))
                continue
            if column.encrypted:
                logger.warning(
                    "query.encrypted_where",
                    table=owner.name,
                    column=column.field,
                    hint="ciphertext is non-deterministic; filter on the hash column",
                )
                value = self.cipher.encrypt(value)
            conditions.append(self.dialect.build_condition(column_sql, params.bind(value)))
        return conditions

    def _apply_hashes(self, table: TableDef, data: Mapping[str, Any]) -> Dict[str, Any]:
        row = dict(data)
        for name, hash_col in table.hash_columns.items():
            if name in data:
                value = data[name]
                row[hash_col] = None if value is None else digest(value)
        return row

    def _encrypt_row(self, table: TableDef, row: Mapping[str, Any]) -> Dict[str, Any]:
        encrypted = dict(row)
        for name in table.encrypted_fields:
            if encrypted.get(name) is not None:
                encrypted[name] = self.cipher.encrypt(encrypted[name])
        return encrypted

    def _filters_on_ciphertext(self, table: TableDef, where: Mapping[str, Any]) -> bool:
        return any(
            value is not None and table.column(key).encrypted for key, value in where.items()
        )

    def _constraint_matches(
        self,
        table: TableDef,
        row: Mapping[str, Any],
        correlate: bool = False,
    ) -> Iterator[Tuple[Tuple[str, ...], Dict[str, Any], List[str]]]:
        """
        Yield ``(columns, match, unresolved)`` per unique constraint the write touches.

        ``match`` holds the constraint values present in *row*; ``unresolved``
        lists constraint columns absent from it. Without *correlate* such
        constraints are skipped, as are constraints with a NULL member: NULLs
        never collide under SQL UNIQUE semantics.
        """
        for constraint in table.unique:
            match = {name: row[name] for name in constraint.columns if name in row}
            if not match:
                continue
            unresolved = [name for name in constraint.columns if name not in row]
            if any(v is None for v in match.values()) or (unresolved and not correlate):
                logger.debug(
                    "query.uniqueness_check_skipped",
                    table=table.name,
                    constraint=",".join(constraint.columns),
                )
                continue
            yield constraint.columns, match, unresolved

    def _insert_check(
        self, table: TableDef, columns: Tuple[str, ...], match: Dict[str, Any]
    ) -> UniquenessCheck:
        return UniquenessCheck(columns=columns, statement=self.exists(table.name, match))

    def _update_check(
        self,
        table: TableDef,
        columns: Tuple[str, ...],
        match: Dict[str, Any],
        unresolved: List[str],
        where: Mapping[str, Any],
    ) -> UniquenessCheck:
        """Check for rows, other than the update targets, that would collide."""
        params = ParameterSet()
        conditions = self._conditions(table, match, params)
        if unresolved:
            target = self._conditions(table, where, params, alias=TARGET_ALIAS)
            target.extend(
                f"{self.dialect.qualify(name, TARGET_ALIAS)} = "
                f"{self.dialect.qualify(name, table.name)}"
                for name in unresolved
            )
            conditions.append(self.dialect.build_exists(table.name, target, alias=TARGET_ALIAS))
        excluded = self._conditions(table, where, params)
        sql = self.dialect.build_select(
            table.name, ["1"], conditions=conditions, exclude=excluded, limit=1
        )
        return UniquenessCheck(columns=columns, statement=Statement(sql, params.values))

    def _target_collision_check(
        self,
        table: TableDef,
        columns: Tuple[str, ...],
        unresolved: List[str],
        where: Mapping[str, Any],
    ) -> UniquenessCheck:
        """
        Check for update targets that would end up sharing one constraint value.

        With every constraint column set by the update, two matching rows are
        already a collision. Otherwise targets collide when they share the
        columns the update leaves alone; NULLs there never collide.
        """
        params = ParameterSet()
        conditions = self._conditions(table, where, params)
        if not unresolved:
            sql = self.dialect.build_select(
                table.name, ["1"], conditions=conditions, limit=1, offset=1
            )
        else:
            grouped = [self.dialect.qualify(name, table.name) for name in unresolved]
            conditions.extend(self.dialect.build_not_null(column) for column in grouped)
            sql = self.dialect.build_select(
                table.name,
                ["1"],
                conditions=conditions,
                group_by=grouped,
                having="COUNT(*) > 1",
                limit=1,
            )
        return UniquenessCheck(columns=columns, statement=Statement(sql, params.values))


__all__ = ["QueryBuilder"]
