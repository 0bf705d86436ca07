"""Core logging setup and configuration.

This module wires structured JSON logging with context propagation and
OpenTelemetry correlation while keeping configuration declarative via
``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Set

from opentelemetry import trace


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    probe = logging.LogRecord(
        name="ldes_snapshot.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS and value is not None:
                log_record[key] = value

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Emit one JSON object per line; plain text otherwise.
    """
    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "snapshot_json": {
                "()": "ldes_snapshot.logging.logger.CustomJsonFormatter",
            },
            "snapshot_text": {
                "format": "%(asctime)s %(levelname)s %(name)s [%(stream_id)s] %(message)s",
            },
        },
        "filters": {
            "snapshot_context": {
                "()": "ldes_snapshot.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level.upper(),
                "formatter": "snapshot_json" if json_output else "snapshot_text",
                "filters": ["snapshot_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "ldes_snapshot": {
                "level": level.upper(),
                "handlers": ["console"],
                "propagate": False,
            }
        },
    }

    logging.config.dictConfig(config_dict)


def configure_logging(settings=None) -> None:
    """Configure logging from ``log_level`` and ``log_json`` of the settings.

    Args:
        settings: Settings to read, defaults to ``get_settings()``
    """
    if settings is None:
        # lazy import: settings pull in constants and pydantic-settings
        from ldes_snapshot.settings import get_settings
        settings = get_settings()
    setup_logging(level=settings.log_level, json_output=settings.log_json)
