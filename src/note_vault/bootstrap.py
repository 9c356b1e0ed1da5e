"""
Process bootstrap for the data layer.

Builds the registry, cipher, SQLAlchemy engine and repository from settings,
once, at process start.
"""

from typing import Optional

from note_vault.config import Settings, get_settings
from note_vault.infrastructure.crypto import FieldCipher
from note_vault.infrastructure.schema import (
    SchemaRegistry,
    default_registry,
    load_registry_from_yaml,
)
from note_vault.io.repositories import TableRepository
from note_vault.io.store import ExecutionEngine, create_store_engine
from note_vault.utils.logging import get_logger

logger = get_logger(__name__)


def load_registry(settings: Settings) -> SchemaRegistry:
    """YAML registry when ``schema_file`` is configured, built-in tables otherwise."""
    if settings.schema_file:
        return load_registry_from_yaml(settings.schema_file)
    return default_registry()


def build_repository(settings: Optional[Settings] = None) -> TableRepository:
    """Wire registry, cipher, engine and repository together."""
    settings = settings or get_settings()
    registry = load_registry(settings)
    cipher = FieldCipher(
        settings.ENCRYPTION_KEY.get_secret_value(),
        key_length=settings.KEY_LENGTH,
        iv_length=settings.IV_LENGTH,
    )
    engine = create_store_engine(settings.DATABASE_URL, echo=settings.sql_echo)
    logger.info(
        "bootstrap.repository_built",
        database_url=settings.DATABASE_URL,
        tables=registry.table_names(),
    )
    return TableRepository(registry, ExecutionEngine(engine, cipher), cipher)


def initialize(settings: Optional[Settings] = None) -> TableRepository:
    """Build the repository and create any missing tables."""
    repository = build_repository(settings)
    repository.init_schema()
    return repository
