"""Shared observability context utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry.trace import Status, StatusCode

from ldes_snapshot.logging import get_logger
from ldes_snapshot.logging.filters import (
    clear_snapshot_context,
    get_snapshot_context,
    set_snapshot_context,
)
from ldes_snapshot.telemetry import get_tracer


@contextmanager
def snapshot_operation_scope(
    operation: str,
    *,
    stream_id: Optional[Any] = None,
    snapshot_id: Optional[Any] = None,
    attributes: Optional[Dict[str, Any]] = None,
) -> Iterator[Any]:
    """Apply logging + tracing scope for one snapshot operation.

    The previous logging context is restored on exit, so scopes nest.
    Yields the active span.
    """
    previous = get_snapshot_context()
    set_snapshot_context(
        stream_id=str(stream_id) if stream_id is not None else None,
        snapshot_id=str(snapshot_id) if snapshot_id is not None else None,
        operation=operation,
    )

    tracer = get_tracer("ldes_snapshot")
    span_attributes = {"ldes_snapshot.operation.name": operation}
    if stream_id is not None:
        span_attributes["ldes_snapshot.stream_id"] = str(stream_id)
    if snapshot_id is not None:
        span_attributes["ldes_snapshot.snapshot_id"] = str(snapshot_id)
    for key, value in (attributes or {}).items():
        if value is not None:
            span_attributes[f"ldes_snapshot.{key}"] = str(value)

    with tracer.start_as_current_span(f"ldes_snapshot.{operation}") as span:
        for key, value in span_attributes.items():
            span.set_attribute(key, value)

        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR))
            get_logger(__name__).error(
                "Snapshot operation failed",
                extra={"operation.name": operation},
                exc_info=True,
            )
            raise
        finally:
            clear_snapshot_context()
            set_snapshot_context(**previous)
