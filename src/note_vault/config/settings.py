"""
Configuration management for NoteVault.

Environment-based configuration using Pydantic BaseSettings. The shared
encryption secret and the table registry location are supplied once at
process start and never mutated afterwards.

Environment variables are read with the ``NV_`` prefix, except for the
uppercase fields below which use their bare names:
- DATABASE_URL: SQLAlchemy URL of the embedded SQLite store
- ENCRYPTION_KEY (required): Shared secret for field encryption
- KEY_LENGTH / IV_LENGTH: Cipher key and IV sizes in bytes
- LOG_LEVEL: Logging level (uppercase)
- ENVIRONMENT: Deployment environment (dev, staging, prod)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import structlog
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("NV_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Example:
        >>> settings = Settings(ENCRYPTION_KEY="0" * 32)
        >>> settings.DATABASE_URL
        'sqlite:///notes.db'
    """

    ENVIRONMENT: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        validation_alias="ENVIRONMENT",
        description="Deployment environment",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DATABASE_URL: str = Field(
        default="sqlite:///notes.db",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy URL of the embedded SQLite store",
    )
    ENCRYPTION_KEY: SecretStr = Field(
        validation_alias="ENCRYPTION_KEY",
        description="Shared secret used to encrypt designated fields",
    )
    KEY_LENGTH: int = Field(
        default=32,
        validation_alias="KEY_LENGTH",
        description="Symmetric key size in bytes (AES-256)",
    )
    IV_LENGTH: int = Field(
        default=16,
        validation_alias="IV_LENGTH",
        description="Initialization vector size in bytes (AES block size)",
    )

    app_name: str = Field(default="NoteVault", description="Application name")
    schema_file: Optional[str] = Field(
        default=None,
        description="Optional YAML file with table descriptors; built-in tables when unset",
    )
    sql_echo: bool = Field(
        default=False, description="Echo emitted SQL through the SQLAlchemy logger"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("DATABASE_URL")
    @classmethod
    def _require_sqlite(cls, value: str) -> str:
        if not value.startswith("sqlite"):
            raise ValueError(
                "DATABASE_URL must point at an embedded SQLite store (sqlite://...)"
            )
        return value

    @model_validator(mode="after")
    def validate_encryption_key_length(self) -> "Settings":
        """The shared secret must match the configured key size exactly."""
        if self.IV_LENGTH != 16:
            raise ValueError("IV_LENGTH must be 16 for AES-CBC")
        if self.KEY_LENGTH not in (16, 24, 32):
            raise ValueError("KEY_LENGTH must be one of 16, 24 or 32")
        key_length = len(self.ENCRYPTION_KEY.get_secret_value())
        if key_length != self.KEY_LENGTH:
            raise ValueError(
                f"ENCRYPTION_KEY must be exactly {self.KEY_LENGTH} characters long"
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="NV_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and reused across the process lifetime.

    Returns:
        Settings instance with loaded configuration
    """
    settings = Settings()
    logger.debug(
        "settings.loaded",
        environment=settings.ENVIRONMENT,
        database_url=settings.DATABASE_URL,
        schema_file=settings.schema_file,
    )
    return settings
