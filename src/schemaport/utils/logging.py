"""Structured logging for schemaport using structlog.

Log records are rendered as JSON with ISO-8601 timestamps, level and logger
name. Output goes to stderr, so generated SQL printed on stdout stays clean,
plus an optional daily-rotated file.

Configuration is loaded from schemaport.config.settings:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- SCHEMAPORT_LOG_TO_FILE: Enable file logging. Default: disabled
- SCHEMAPORT_LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from schemaport.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("ddl.create_table", table="users", statements=3)
"""

import logging
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, List

import structlog
from structlog.types import Processor

from schemaport.config import get_settings


def _get_log_level() -> int:
    level_name = get_settings().LOG_LEVEL
    return getattr(logging, level_name, logging.INFO)


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = Path(get_settings().log_file_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: schemaport-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"schemaport-{date_str}.log"


def _configure_structlog() -> None:
    """Configure stdlib handlers and the structlog processor chain."""
    level = _get_log_level()
    logger = logging.getLogger("schemaport")
    logger.setLevel(level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(stream_handler)

    if get_settings().log_to_file:
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(file_handler)

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
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


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger for a ``schemaport.*`` module.

    Args:
        name: Logger name (typically __name__ of the calling module)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields, e.g. ``platform="oracle"``."""
    return structlog.get_logger("schemaport").bind(**kwargs)
