"""Logging configuration for patrimoine_sim.

Provides structured logging using structlog with JSON output for production
and plain console output for development.

The engine never configures logging by itself: importing the package leaves
the host application's handlers and levels alone. Applications embedding the
engine call ``configure_logging()`` once at startup if they want its format.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

import structlog

# Module-level state for idempotent initialization
_configured: bool = False


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    log_file: str | Path | None = None,
) -> structlog.BoundLogger:
    """Configure structured logging for an application using the engine.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the settings value.
        json_output: If True, output JSON format. Defaults to the settings value.
        log_file: Optional path of a rotating log file, in addition to stdout.

    Returns:
        Configured logger instance.
    """
    global _configured

    if _configured:
        return structlog.get_logger()

    from patrimoine_sim.core.settings import get_settings

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    if json_output is None:
        json_output = settings.json_logs

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                str(log_path), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> Any:
    """Get a lazy logger, optionally bound to a specific name.

    Nothing is configured here. The returned proxy resolves against whatever
    structlog configuration is active when it first logs.
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
