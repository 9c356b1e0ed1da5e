"""
YAML loader for table descriptors.

A schema file holds a top-level ``tables`` list in the descriptor shape
accepted by :func:`table_from_descriptor`::

    tables:
      - name: USERS
        columns:
          - {field: user_id, type: INTEGER, primary: true, auto_increment: true}
          - {field: user_code, type: TEXT}
"""

import logging
from pathlib import Path
from typing import Union

import yaml

from note_vault.exceptions import SchemaError

from .registry import SchemaRegistry

logger = logging.getLogger(__name__)


def load_registry_from_yaml(path: Union[str, Path]) -> SchemaRegistry:
    """
    Load and validate a schema registry from a YAML file.

    Raises:
        SchemaError: If the file cannot be loaded or its structure is invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise SchemaError(f"Schema file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML schema: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
        raise SchemaError("Schema file must contain a 'tables' list")

    registry = SchemaRegistry.from_descriptors(data["tables"])
    logger.debug(f"Loaded {len(registry)} tables from {path}")
    return registry
