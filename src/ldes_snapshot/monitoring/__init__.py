"""Monitoring infrastructure for selection metrics."""

from ldes_snapshot.monitoring.metrics import MetricsCollector, SelectionStats

__all__ = [
    "SelectionStats",
    "MetricsCollector",
]
