"""
Command-line entry point for NoteVault.

Usage:
    python -m note_vault.cli <command> [options]

Available commands:
    init-db   - Create every registered table in the configured store
    show-ddl  - Print the CREATE TABLE statements without touching the store
    tables    - List registered tables and their encrypted columns
"""

import argparse
import sys
from typing import List, Optional

import pydantic

from note_vault.exceptions import NoteVaultError
from note_vault.infrastructure.schema import (
    default_registry,
    generate_schema_ddl,
    load_registry_from_yaml,
)
from note_vault.utils.logging import get_logger

logger = get_logger(__name__)


def _registry_for(schema_file: Optional[str]):
    if schema_file:
        return load_registry_from_yaml(schema_file)
    return default_registry()


def _cmd_init_db(args: argparse.Namespace) -> int:
    from note_vault.bootstrap import initialize
    from note_vault.config import get_settings

    settings = get_settings()
    if args.schema_file:
        settings = settings.model_copy(update={"schema_file": args.schema_file})
    repository = initialize(settings)
    print(f"Initialized {len(repository.registry)} tables at {settings.DATABASE_URL}")
    return 0


def _cmd_show_ddl(args: argparse.Namespace) -> int:
    for statement in generate_schema_ddl(_registry_for(args.schema_file)):
        print(f"{statement};")
    return 0


def _cmd_tables(args: argparse.Namespace) -> int:
    for table in _registry_for(args.schema_file):
        encrypted = ", ".join(table.encrypted_fields) or "-"
        print(f"{table.name}: {len(table.columns)} columns, encrypted: {encrypted}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="note_vault.cli",
        description="NoteVault CLI - schema and store management",
    )
    parser.add_argument(
        "--schema-file",
        default=None,
        help="YAML file with table descriptors (defaults to the built-in tables)",
    )
    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        help="Command to execute",
    )
    subparsers.add_parser("init-db", help="Create registered tables in the store")
    subparsers.add_parser("show-ddl", help="Print CREATE TABLE statements")
    subparsers.add_parser("tables", help="List registered tables")

    args = parser.parse_args(argv)
    handlers = {
        "init-db": _cmd_init_db,
        "show-ddl": _cmd_show_ddl,
        "tables": _cmd_tables,
    }

    try:
        return handlers[args.command](args)
    except (NoteVaultError, pydantic.ValidationError) as exc:
        logger.error("cli.command_failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
