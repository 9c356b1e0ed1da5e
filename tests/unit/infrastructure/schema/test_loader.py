"""
Unit tests for the YAML schema loader.
"""

from __future__ import annotations

import pytest

from note_vault.exceptions import SchemaError
from note_vault.infrastructure.schema import load_registry_from_yaml

SCHEMA_YAML = """
tables:
  - name: USERS
    columns:
      - {field: user_id, type: INTEGER, primary: true, auto_increment: true}
      - {field: email, type: TEXT, encrypted: true, hash_col: email_hash}
      - {field: email_hash, type: TEXT}
    unique:
      - email_hash
"""


def test_loads_registry_from_yaml(tmp_path) -> None:
    path = tmp_path / "schema.yml"
    path.write_text(SCHEMA_YAML, encoding="utf-8")

    registry = load_registry_from_yaml(path)

    table = registry.lookup("USERS")
    assert table.field_names == ["user_id", "email", "email_hash"]
    assert table.hash_columns == {"email": "email_hash"}
    assert table.unique[0].columns == ("email_hash",)


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(SchemaError, match="not found"):
        load_registry_from_yaml(tmp_path / "missing.yml")


def test_invalid_yaml_raises(tmp_path) -> None:
    path = tmp_path / "broken.yml"
    path.write_text("tables: [unclosed", encoding="utf-8")
    with pytest.raises(SchemaError, match="Invalid YAML"):
        load_registry_from_yaml(path)


def test_missing_tables_key_raises(tmp_path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("something: else\n", encoding="utf-8")
    with pytest.raises(SchemaError, match="'tables' list"):
        load_registry_from_yaml(path)
