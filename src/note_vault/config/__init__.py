"""Configuration management for NoteVault.

Usage:
    >>> from note_vault.config import get_settings
    >>> settings = get_settings()
    >>> settings.DATABASE_URL
"""

from note_vault.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
