"""Structured logging configuration for the emitter.

Uses structlog for structured, context-rich logging with
support for both console and JSON output formats.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from emitter.config import EmitterSettings


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON format
        log_file: Optional file to log to
        colors: Whether to use colors in console output
    """
    # basicConfig owns the FileHandler, so force=True closes it on reconfigure.
    output: dict[str, Any] = {"stream": sys.stderr}
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        output = {"filename": str(log_file), "encoding": "utf-8"}

    logging.basicConfig(
        format="%(message)s",
        **output,
        level=getattr(logging, level.upper()),
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_from_settings(settings: EmitterSettings, log_file: Path | None = None) -> None:
    """Configure logging from emitter settings.

    Args:
        settings: Loaded settings (log level and output format)
        log_file: Optional file to log to
    """
    configure_logging(
        level=settings.log_level,
        json_output=settings.json_logs,
        log_file=log_file,
        colors=not settings.json_logs,
    )
