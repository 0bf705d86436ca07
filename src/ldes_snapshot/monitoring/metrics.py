"""Metrics collection for selection passes.

This module provides the per-pass counters kept by the selector and the
collector that exports them to OpenTelemetry.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ldes_snapshot.__version__ import __version__
from ldes_snapshot.logging import get_logger
from ldes_snapshot.telemetry import get_meter


@dataclass
class SelectionStats:
    """Counters for a single selection pass.

    Attributes:
        operation: Operation that ran the pass (e.g. 'create_snapshot', 'combine_snapshots')
        stream_id: Source stream identifier
        snapshot_id: Output snapshot identifier
        members_seen: Members pulled from the source
        accepted: Members that became the current selection for their object
        superseded: Earlier selections replaced by a strictly newer member
        outdated: Members discarded because a selection at least as new existed
        too_recent: Members discarded because they are newer than the cutoff
        rejected: Members skipped because they failed validation
        objects_selected: Records emitted at the end of the pass
        duration_seconds: Wall-clock duration of the pass
    """

    operation: str = "select"
    stream_id: Optional[str] = None
    snapshot_id: Optional[str] = None
    members_seen: int = 0
    accepted: int = 0
    superseded: int = 0
    outdated: int = 0
    too_recent: int = 0
    rejected: int = 0
    objects_selected: int = 0
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data


class MetricsCollector:
    """Collector for selection metrics.

    Exports the counters of every finished pass to OpenTelemetry and keeps
    them in memory for summaries.
    """

    def __init__(self, settings: Any = None):
        self.settings = settings
        self.logger = get_logger(__name__)
        self._history: List[SelectionStats] = []

        self.meter = get_meter("ldes_snapshot", __version__)
        self._setup_instruments()

    def _setup_instruments(self) -> None:
        """Setup OpenTelemetry instruments."""
        self.pass_counter = self.meter.create_counter(
            "snapshot_selection_passes_total",
            description="Total number of selection passes",
            unit="passes"
        )

        self.member_counter = self.meter.create_counter(
            "snapshot_members_total",
            description="Members processed, by outcome",
            unit="members"
        )

        self.object_counter = self.meter.create_counter(
            "snapshot_objects_selected_total",
            description="Objects emitted by selection passes",
            unit="objects"
        )

        self.duration_histogram = self.meter.create_histogram(
            "snapshot_selection_duration_seconds",
            description="Duration of selection passes",
            unit="seconds"
        )

    def record_selection(self, stats: SelectionStats) -> None:
        """Record a finished selection pass.

        Args:
            stats: Counters of the pass
        """
        self._history.append(stats)

        attributes = {"operation": stats.operation}

        self.pass_counter.add(1, attributes)
        for outcome in ("accepted", "superseded", "outdated", "too_recent", "rejected"):
            count = getattr(stats, outcome)
            if count:
                self.member_counter.add(count, {**attributes, "outcome": outcome})
        self.object_counter.add(stats.objects_selected, attributes)
        self.duration_histogram.record(stats.duration_seconds, attributes)

        self.logger.info("Selection pass recorded", extra=stats.to_dict())

    @property
    def history(self) -> List[SelectionStats]:
        return list(self._history)

    def get_metrics_summary(self) -> Dict[str, Any]:
        """Summarize all recorded passes."""
        if not self._history:
            return {
                "total_passes": 0,
                "members_seen": 0,
                "rejected": 0,
                "objects_selected": 0,
                "total_duration_seconds": 0.0,
            }

        return {
            "total_passes": len(self._history),
            "members_seen": sum(s.members_seen for s in self._history),
            "rejected": sum(s.rejected for s in self._history),
            "objects_selected": sum(s.objects_selected for s in self._history),
            "total_duration_seconds": sum(s.duration_seconds for s in self._history),
            "passes_by_operation": self._group_by_operation(),
        }

    def _group_by_operation(self) -> Dict[str, int]:
        grouped: Dict[str, int] = {}
        for stats in self._history:
            grouped[stats.operation] = grouped.get(stats.operation, 0) + 1
        return grouped
