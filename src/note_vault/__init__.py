"""NoteVault: schema-driven data access with field-level encryption.

Usage:
    >>> from note_vault import initialize
    >>> repo = initialize()
    >>> repo.create("USERS", {"user_code": "abc123"})
"""

from note_vault.bootstrap import build_repository, initialize
from note_vault.exceptions import (
    EncryptionError,
    NoteVaultError,
    SchemaError,
    StoreError,
    UniquenessError,
    ValidationError,
)
from note_vault.io.repositories import (
    DeleteResult,
    InsertResult,
    TableRepository,
    UpdateResult,
)

__version__ = "0.1.0"

__all__ = [
    "build_repository",
    "initialize",
    "TableRepository",
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
    "NoteVaultError",
    "SchemaError",
    "ValidationError",
    "EncryptionError",
    "UniquenessError",
    "StoreError",
]
