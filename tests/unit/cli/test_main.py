"""Unit tests for the NoteVault command-line entry point."""

import pytest

from note_vault.cli.__main__ import main
from note_vault.config import get_settings

SCHEMA_YAML = """
tables:
  - name: TAGS
    columns:
      - {field: tag_id, type: INTEGER, primary: true, auto_increment: true}
      - {field: label, type: TEXT, encrypted: true}
"""


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
def test_show_ddl_prints_one_statement_per_table(capsys):
    assert main(["show-ddl"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert all(line.endswith(";") for line in lines)
    assert lines[0].startswith('CREATE TABLE IF NOT EXISTS "USERS"')


@pytest.mark.unit
def test_tables_lists_encrypted_columns(capsys):
    assert main(["tables"]) == 0
    out = capsys.readouterr().out
    assert "USERS: 2 columns, encrypted: -" in out
    assert "NOTE_TYPES: 4 columns, encrypted: note_type_title" in out
    assert "NOTES: 5 columns, encrypted: content" in out


@pytest.mark.unit
def test_schema_file_option(tmp_path, capsys):
    schema = tmp_path / "schema.yml"
    schema.write_text(SCHEMA_YAML, encoding="utf-8")
    assert main(["--schema-file", str(schema), "tables"]) == 0
    assert capsys.readouterr().out.strip() == "TAGS: 2 columns, encrypted: label"


@pytest.mark.unit
def test_missing_schema_file_is_reported(tmp_path, capsys):
    assert main(["--schema-file", str(tmp_path / "nope.yml"), "show-ddl"]) == 1
    assert "Schema file not found" in capsys.readouterr().err


@pytest.mark.unit
def test_init_db_creates_tables(tmp_path, monkeypatch, capsys):
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("ENCRYPTION_KEY", "0123456789abcdef0123456789abcdef")

    assert main(["init-db"]) == 0
    assert "Initialized 3 tables" in capsys.readouterr().out
    assert db_path.exists()


@pytest.mark.unit
def test_init_db_with_invalid_key_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("ENCRYPTION_KEY", "too-short")

    assert main(["init-db"]) == 1
    assert "ENCRYPTION_KEY" in capsys.readouterr().err
