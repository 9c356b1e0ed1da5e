"""Built-in table definitions."""

from ..registry import SchemaRegistry
from .notes import TABLES


def default_registry() -> SchemaRegistry:
    """Registry of the built-in notes application tables."""
    return SchemaRegistry.from_descriptors(TABLES)


__all__ = ["default_registry", "TABLES"]
