"""
SQLite-specific SQL dialect implementation.

Provides SQLite syntax for table creation, the fixed CRUD statement shapes
and identifier quoting. Methods take already-validated identifiers and
already-bound placeholders; nothing here sees a value.
"""

from typing import List, Optional, Sequence

from ..core.identifier import qualify_column, quote_identifier


class SQLiteDialect:
    """SQLite SQL dialect implementation."""

    name = "sqlite"

    def quote(self, identifier: str) -> str:
        """Quote an identifier using double quotes."""
        return quote_identifier(identifier)

    def qualify(self, column: str, table: Optional[str] = None) -> str:
        """Create a table-qualified column reference."""
        return qualify_column(column, table)

    def build_column_clause(
        self,
        name: str,
        sql_type: str,
        primary: bool = False,
        auto_increment: bool = False,
        default: Optional[str] = None,
    ) -> str:
        """
        Build one column definition of a CREATE TABLE statement.

        ``default`` is a SQL expression taken verbatim from the schema
        descriptor (e.g. ``CURRENT_TIMESTAMP``).
        """
        parts = [self.quote(name), sql_type]
        if primary:
            parts.append("PRIMARY KEY")
        if auto_increment:
            parts.append("AUTOINCREMENT")
        if default is not None:
            parts.append(f"DEFAULT {default}")
        return " ".join(parts)

    def build_foreign_key(self, column: str, ref_table: str, ref_column: str) -> str:
        return (
            f"FOREIGN KEY ({self.quote(column)}) "
            f"REFERENCES {self.quote(ref_table)}({self.quote(ref_column)}) ON DELETE CASCADE"
        )

    def build_unique(self, columns: Sequence[str]) -> str:
        return f"UNIQUE ({', '.join(self.quote(c) for c in columns)})"

    def build_create_table(self, table: str, clauses: List[str]) -> str:
        """
        Build a CREATE TABLE IF NOT EXISTS statement.

        Example:
            >>> SQLiteDialect().build_create_table("USERS", ['"user_id" INTEGER'])
            'CREATE TABLE IF NOT EXISTS "USERS" ("user_id" INTEGER)'
        """
        return f"CREATE TABLE IF NOT EXISTS {self.quote(table)} ({', '.join(clauses)})"

    def build_condition(self, column_sql: str, placeholder: Optional[str]) -> str:
        """Equality condition; a missing placeholder means ``IS NULL``."""
        if placeholder is None:
            return f"{column_sql} IS NULL"
        return f"{column_sql} = {placeholder}"

    def build_not_null(self, column_sql: str) -> str:
        return f"{column_sql} IS NOT NULL"

    def build_left_join(
        self, other_table: str, other_key: str, base_table: str, base_column: str
    ) -> str:
        return (
            f"LEFT JOIN {self.quote(other_table)} ON "
            f"{self.qualify(base_column, base_table)} = {self.qualify(other_key, other_table)}"
        )

    def _where(self, conditions: Sequence[str], exclude: Sequence[str] = ()) -> str:
        clauses = list(conditions)
        if exclude:
            clauses.append(f"NOT ({' AND '.join(exclude)})")
        if not clauses:
            return ""
        return f" WHERE {' AND '.join(clauses)}"

    def build_select(
        self,
        table: str,
        projections: Sequence[str],
        joins: Sequence[str] = (),
        conditions: Sequence[str] = (),
        exclude: Sequence[str] = (),
        limit: Optional[int] = None,
        group_by: Sequence[str] = (),
        having: Optional[str] = None,
        offset: Optional[int] = None,
    ) -> str:
        """
        Build a SELECT statement.

        ``group_by`` entries are column expressions; ``having`` is an
        aggregate condition applied to the groups.

        Example:
            >>> SQLiteDialect().build_select("USERS", ['"USERS"."user_id"'], conditions=['"USERS"."user_code" = :p_0'])
            'SELECT "USERS"."user_id" FROM "USERS" WHERE "USERS"."user_code" = :p_0'
        """
        sql = f"SELECT {', '.join(projections)} FROM {self.quote(table)}"
        for join in joins:
            sql += f" {join}"
        sql += self._where(conditions, exclude)
        if group_by:
            sql += f" GROUP BY {', '.join(group_by)}"
        if having:
            sql += f" HAVING {having}"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
            if offset:
                sql += f" OFFSET {int(offset)}"
        return sql

    def build_exists(
        self, table: str, conditions: Sequence[str], alias: Optional[str] = None
    ) -> str:
        """
        Build an ``EXISTS (...)`` subquery condition.

        Example:
            >>> SQLiteDialect().build_exists("T", ['"t"."a" = :p_0'], alias="t")
            'EXISTS (SELECT 1 FROM "T" AS "t" WHERE "t"."a" = :p_0)'
        """
        source = self.quote(table)
        if alias:
            source += f" AS {self.quote(alias)}"
        return f"EXISTS (SELECT 1 FROM {source}{self._where(conditions)})"

    def build_insert(
        self, table: str, columns: Sequence[str], placeholders: Sequence[str]
    ) -> str:
        """
        Build a simple INSERT statement.

        Example:
            >>> SQLiteDialect().build_insert("USERS", ["user_code"], [":p_0"])
            'INSERT INTO "USERS" ("user_code") VALUES (:p_0)'
        """
        if not columns:
            return f"INSERT INTO {self.quote(table)} DEFAULT VALUES"
        quoted_cols = ", ".join(self.quote(c) for c in columns)
        return f"INSERT INTO {self.quote(table)} ({quoted_cols}) VALUES ({', '.join(placeholders)})"

    def build_update(
        self, table: str, assignments: Sequence[str], conditions: Sequence[str]
    ) -> str:
        return f"UPDATE {self.quote(table)} SET {', '.join(assignments)}{self._where(conditions)}"

    def build_delete(self, table: str, conditions: Sequence[str]) -> str:
        return f"DELETE FROM {self.quote(table)}{self._where(conditions)}"
