"""
Unit tests for the SQLite dialect.
"""

import pytest

from note_vault.infrastructure.sql.dialects.sqlite import SQLiteDialect


class TestSQLiteDialect:
    """Tests for statement text produced by SQLiteDialect."""

    @pytest.fixture
    def dialect(self):
        return SQLiteDialect()

    def test_dialect_name(self, dialect):
        assert dialect.name == "sqlite"

    def test_column_clause_with_all_flags(self, dialect):
        clause = dialect.build_column_clause(
            "user_id", "INTEGER", primary=True, auto_increment=True
        )
        assert clause == '"user_id" INTEGER PRIMARY KEY AUTOINCREMENT'

    def test_column_clause_with_default(self, dialect):
        clause = dialect.build_column_clause(
            "created_at", "DATETIME", default="CURRENT_TIMESTAMP"
        )
        assert clause == '"created_at" DATETIME DEFAULT CURRENT_TIMESTAMP'

    def test_foreign_key_cascades(self, dialect):
        clause = dialect.build_foreign_key("user_id", "USERS", "user_id")
        assert clause == (
            'FOREIGN KEY ("user_id") REFERENCES "USERS"("user_id") ON DELETE CASCADE'
        )

    def test_unique_clause(self, dialect):
        assert dialect.build_unique(["a", "b"]) == 'UNIQUE ("a", "b")'

    def test_condition_binds_placeholder(self, dialect):
        assert dialect.build_condition('"T"."a"', ":p_0") == '"T"."a" = :p_0'

    def test_condition_without_placeholder_is_null_check(self, dialect):
        assert dialect.build_condition('"T"."a"', None) == '"T"."a" IS NULL'

    def test_select_with_join_exclude_and_limit(self, dialect):
        sql = dialect.build_select(
            "T",
            ["1"],
            joins=['LEFT JOIN "O" ON "T"."o_id" = "O"."o_id"'],
            conditions=['"T"."a" = :p_0'],
            exclude=['"T"."id" = :p_1'],
            limit=1,
        )
        assert sql == (
            'SELECT 1 FROM "T" LEFT JOIN "O" ON "T"."o_id" = "O"."o_id" '
            'WHERE "T"."a" = :p_0 AND NOT ("T"."id" = :p_1) LIMIT 1'
        )

    def test_select_with_group_by_and_having(self, dialect):
        sql = dialect.build_select(
            "T",
            ["1"],
            conditions=[dialect.build_not_null('"T"."a"')],
            group_by=['"T"."a"'],
            having="COUNT(*) > 1",
            limit=1,
        )
        assert sql == (
            'SELECT 1 FROM "T" WHERE "T"."a" IS NOT NULL '
            'GROUP BY "T"."a" HAVING COUNT(*) > 1 LIMIT 1'
        )

    def test_select_with_offset(self, dialect):
        sql = dialect.build_select("T", ["1"], limit=1, offset=1)
        assert sql == 'SELECT 1 FROM "T" LIMIT 1 OFFSET 1'

    def test_select_without_conditions(self, dialect):
        assert dialect.build_select("T", ['"T"."a"']) == 'SELECT "T"."a" FROM "T"'

    def test_insert_without_columns_uses_default_values(self, dialect):
        assert dialect.build_insert("USERS", [], []) == 'INSERT INTO "USERS" DEFAULT VALUES'

    def test_update(self, dialect):
        sql = dialect.build_update("T", ['"a" = :p_0'], ['"T"."id" = :p_1'])
        assert sql == 'UPDATE "T" SET "a" = :p_0 WHERE "T"."id" = :p_1'

    def test_delete(self, dialect):
        sql = dialect.build_delete("T", ['"T"."id" = :p_0'])
        assert sql == 'DELETE FROM "T" WHERE "T"."id" = :p_0'

    def test_exists_subquery_with_alias(self, dialect):
        sql = dialect.build_exists("T", ['"t"."id" = :p_0'], alias="t")
        assert sql == 'EXISTS (SELECT 1 FROM "T" AS "t" WHERE "t"."id" = :p_0)'
