"""
Unit tests for DDL generation.

Generation is a pure function of the registry; no store is needed.
"""

from __future__ import annotations

from note_vault.infrastructure.schema import (
    SchemaRegistry,
    generate_create_table_ddl,
    generate_schema_ddl,
    generate_schema_script,
)


class TestGenerateCreateTableDdl:
    def test_users_table(self, registry) -> None:
        sql = generate_create_table_ddl(registry.lookup("USERS"))
        assert sql == (
            'CREATE TABLE IF NOT EXISTS "USERS" '
            '("user_id" INTEGER PRIMARY KEY AUTOINCREMENT, "user_code" TEXT)'
        )

    def test_note_types_has_foreign_key_and_unique(self, registry) -> None:
        sql = generate_create_table_ddl(registry.lookup("NOTE_TYPES"))
        assert sql == (
            'CREATE TABLE IF NOT EXISTS "NOTE_TYPES" ('
            '"note_type_id" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"user_id" INTEGER, '
            '"note_type_title" TEXT, '
            '"note_type_title_hash" TEXT, '
            'FOREIGN KEY ("user_id") REFERENCES "USERS"("user_id") ON DELETE CASCADE, '
            'UNIQUE ("user_id", "note_type_title_hash"))'
        )

    def test_notes_default_and_one_foreign_key_per_column(self, registry) -> None:
        sql = generate_create_table_ddl(registry.lookup("NOTES"))
        assert '"created_at" DATETIME DEFAULT CURRENT_TIMESTAMP' in sql
        assert sql.count("FOREIGN KEY") == 2
        assert sql.count("ON DELETE CASCADE") == 2
        assert "UNIQUE" not in sql


class TestGenerateSchema:
    def test_one_statement_per_table(self, registry) -> None:
        assert len(generate_schema_ddl(registry)) == 3

    def test_empty_registry(self) -> None:
        assert generate_schema_ddl(SchemaRegistry([])) == []
        assert generate_schema_script(SchemaRegistry([])) == ""

    def test_script_is_semicolon_joined(self, registry) -> None:
        script = generate_schema_script(registry)
        assert script.count("; ") == 2
        assert script.startswith('CREATE TABLE IF NOT EXISTS "USERS"')

    def test_generation_is_repeatable(self, registry) -> None:
        assert generate_schema_ddl(registry) == generate_schema_ddl(registry)
