"""Pytest configuration and shared fixtures.

.nv_env (if present) is loaded first with override=True so tests never pick
up a production ENCRYPTION_KEY or DATABASE_URL from the system environment.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_NV_ENV_FILE = Path(__file__).parent.parent / ".nv_env"
if _NV_ENV_FILE.exists():
    load_dotenv(_NV_ENV_FILE, override=True)

import os

import pytest

TEST_SECRET = "0123456789abcdef0123456789abcdef"

os.environ.setdefault("ENCRYPTION_KEY", TEST_SECRET)

from note_vault.infrastructure.crypto import FieldCipher
from note_vault.infrastructure.schema import SchemaRegistry, default_registry
from note_vault.infrastructure.sql.operations import QueryBuilder
from note_vault.io.repositories import TableRepository
from note_vault.io.store import ExecutionEngine, create_store_engine


@pytest.fixture
def cipher() -> FieldCipher:
    return FieldCipher(TEST_SECRET)


@pytest.fixture
def registry() -> SchemaRegistry:
    return default_registry()


@pytest.fixture
def builder(registry, cipher) -> QueryBuilder:
    return QueryBuilder(registry, cipher)


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'notes.db'}"


@pytest.fixture
def store_engine(sqlite_url):
    engine = create_store_engine(sqlite_url)
    yield engine
    engine.dispose()


@pytest.fixture
def executor(store_engine, cipher) -> ExecutionEngine:
    return ExecutionEngine(store_engine, cipher)


@pytest.fixture
def repository(registry, executor, cipher) -> TableRepository:
    """Repository over a fresh SQLite file with the built-in tables created."""
    repo = TableRepository(registry, executor, cipher)
    repo.init_schema()
    return repo
