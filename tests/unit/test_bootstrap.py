"""Unit tests for repository wiring from settings."""

import pytest

from note_vault import build_repository, initialize
from note_vault.config import Settings

KEY = "0123456789abcdef0123456789abcdef"

SCHEMA_YAML = """
tables:
  - name: TAGS
    columns:
      - {field: tag_id, type: INTEGER, primary: true, auto_increment: true}
      - {field: label, type: TEXT, encrypted: true}
"""


def _settings(tmp_path, **overrides):
    return Settings(
        _env_file=None,
        ENCRYPTION_KEY=KEY,
        DATABASE_URL=f"sqlite:///{tmp_path / 'boot.db'}",
        **overrides,
    )


@pytest.mark.unit
def test_build_repository_uses_builtin_tables(tmp_path):
    repository = build_repository(_settings(tmp_path))
    assert repository.registry.table_names() == ["USERS", "NOTE_TYPES", "NOTES"]


@pytest.mark.unit
def test_initialize_creates_tables(tmp_path):
    repository = initialize(_settings(tmp_path))
    assert repository.create("USERS", {"user_code": "abc123"}).inserted_id == 1


@pytest.mark.unit
def test_schema_file_setting_loads_yaml(tmp_path):
    schema = tmp_path / "schema.yml"
    schema.write_text(SCHEMA_YAML, encoding="utf-8")
    repository = initialize(_settings(tmp_path, schema_file=str(schema)))
    repository.create("TAGS", {"label": "urgent"})
    assert repository.read("TAGS", ["label"]) == [{"label": "urgent"}]
