"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

from scopeconf.settings import ScopeconfSettings, get_settings


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for configuration loading.

    Sets up structlog with JSON (or console) output and processors for
    timestamps, log levels and context binding. Values read from
    configuration files are never passed to the logger, only keys and counts.

    Args:
        level: Logging level, numeric or name such as "DEBUG" (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )


def configure_logging_from_settings(
    settings: ScopeconfSettings | None = None,
    output: TextIO = sys.stderr,
) -> None:
    """Configure logging from SCOPECONF_LOG_LEVEL and SCOPECONF_LOG_JSON.

    Args:
        settings: Settings to read (default: a fresh `get_settings()`).
        output: Output stream (default: stderr).
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, output=output, json_format=settings.log_json)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_load_context(scope: str, env: str) -> None:
    """Bind scope and env to all subsequent log messages.

    Args:
        scope: Scope name being loaded.
        env: Requested environment.
    """
    structlog.contextvars.bind_contextvars(scope=scope, env=env)


def clear_load_context() -> None:
    """Clear scope and env from log messages."""
    structlog.contextvars.unbind_contextvars("scope", "env")
