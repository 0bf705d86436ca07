"""Observability utilities for ldes_snapshot."""

from .context import snapshot_operation_scope

__all__ = [
    "snapshot_operation_scope",
]
