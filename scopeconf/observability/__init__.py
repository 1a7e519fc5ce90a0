"""Observability module for logging and metrics."""

from scopeconf.observability.logging import (
    bind_load_context,
    clear_load_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from scopeconf.observability.metrics import LoaderMetrics


__all__ = [
    "LoaderMetrics",
    "bind_load_context",
    "clear_load_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
