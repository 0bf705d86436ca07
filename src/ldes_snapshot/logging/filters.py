"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of logs for one snapshot operation.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Dict, Optional

from ldes_snapshot.__version__ import __version__

stream_id_var: ContextVar[Optional[str]] = ContextVar("stream_id", default=None)
snapshot_id_var: ContextVar[Optional[str]] = ContextVar("snapshot_id", default=None)
operation_var: ContextVar[Optional[str]] = ContextVar("operation", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    This filter extracts values from context variables and adds them to
    log records, so every line emitted during a selection pass names the
    stream and snapshot it belongs to.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "stream_id", stream_id_var.get())
        setattr(record, "snapshot_id", snapshot_id_var.get())
        setattr(record, "operation", operation_var.get())
        setattr(record, "sdk_name", "ldes_snapshot")
        setattr(record, "sdk_version", __version__)

        return True


def set_snapshot_context(
    stream_id: Optional[str] = None,
    snapshot_id: Optional[str] = None,
    operation: Optional[str] = None,
) -> None:
    """Set snapshot context variables."""
    if stream_id is not None:
        stream_id_var.set(stream_id)
    if snapshot_id is not None:
        snapshot_id_var.set(snapshot_id)
    if operation is not None:
        operation_var.set(operation)


def clear_snapshot_context() -> None:
    """Clear all snapshot context variables."""
    stream_id_var.set(None)
    snapshot_id_var.set(None)
    operation_var.set(None)


def get_snapshot_context() -> Dict[str, Optional[str]]:
    """Current snapshot context values."""
    return {
        "stream_id": stream_id_var.get(),
        "snapshot_id": snapshot_id_var.get(),
        "operation": operation_var.get(),
    }
