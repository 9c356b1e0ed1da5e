"""Structlog setup for NoteVault.

Every record is rendered as one JSON object. Row values, where clauses and
bound parameters are redacted before rendering, as is anything that looks
like key material, so plaintext of encrypted columns never reaches a log.

Environment:
- LOG_LEVEL: read through settings, or directly when settings cannot load
- LOG_TO_FILE: ``1``/``true``/``yes`` adds a daily rotating file
- LOG_FILE_DIR: directory for that file (``logs`` by default)

Usage:
    >>> from note_vault.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("record.created", table="NOTES", rows_affected=1)
"""

import logging
import os
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, MutableMapping

import pydantic
import structlog
from structlog.types import EventDict, Processor

from note_vault.config import get_settings

SENSITIVE_PATTERNS = [
    re.compile(r".*(password|token|secret|encryption_key).*", re.IGNORECASE),
    re.compile(r"^(params|data|where|values)$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"

LOG_FILE_PREFIX = "notevault"


def _is_sensitive(key: str) -> bool:
    return any(pattern.match(key) for pattern in SENSITIVE_PATTERNS)


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of *data* with sensitive keys redacted, nested dicts included.

    Example:
        >>> sanitize_for_logging({"params": {"p_0": "Work"}, "table": "NOTES"})
        {'params': '[REDACTED]', 'table': 'NOTES'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive(key):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    return sanitize_for_logging(dict(event_dict))


def _level_from_config() -> int:
    # Settings fail without ENCRYPTION_KEY; CLI help and tests still log
    try:
        name = get_settings().LOG_LEVEL
    except pydantic.ValidationError:
        name = os.getenv("LOG_LEVEL", "INFO")
    return getattr(logging, name.upper(), logging.INFO)


def _daily_log_file() -> Path:
    directory = Path(os.getenv("LOG_FILE_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{LOG_FILE_PREFIX}-{datetime.now():%Y%m%d}.log"


def _handlers(level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if os.getenv("LOG_TO_FILE", "").lower() in ("1", "true", "yes"):
        handlers.append(
            TimedRotatingFileHandler(
                filename=str(_daily_log_file()),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setLevel(level)
    return handlers


def _configure() -> None:
    level = _level_from_config()
    logging.root.setLevel(level)
    for handler in _handlers(level):
        logging.root.addHandler(handler)

    processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_configure()


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Logger carrying *kwargs* on every record, e.g. ``bind_context(table="NOTES")``."""
    return structlog.get_logger().bind(**kwargs)
