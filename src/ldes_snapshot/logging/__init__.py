"""Logging infrastructure for ldes_snapshot.

This module provides structured logging with JSON output and context
tracking for snapshot operations.
"""

from ldes_snapshot.logging.filters import (
    ContextFilter,
    clear_snapshot_context,
    get_snapshot_context,
    set_snapshot_context,
)
from ldes_snapshot.logging.logger import CustomJsonFormatter, configure_logging, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "configure_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_snapshot_context",
    "clear_snapshot_context",
    "get_snapshot_context",
]
