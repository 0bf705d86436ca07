"""Combining two snapshots of one event stream.

Combination is a full recomputation: the members of both snapshots are
concatenated and run through a fresh selection pass at the later cutoff.
It costs ``|base| + |incremental|`` member resolutions, not a delta merge.
"""

from typing import Optional, Union

from rdflib import Graph

from ldes_snapshot.common.exceptions import consistency_error, validation_error
from ldes_snapshot.logging import get_logger
from ldes_snapshot.monitoring.metrics import MetricsCollector
from ldes_snapshot.observability import snapshot_operation_scope
from ldes_snapshot.snapshot.metadata import SnapshotMetadataParser
from ldes_snapshot.snapshot.selector import SnapshotSelector
from ldes_snapshot.types.config import ResolvedSelectionConfig
from ldes_snapshot.types.snapshot import Snapshot

logger = get_logger(__name__)

SnapshotLike = Union[Snapshot, Graph]


def _as_snapshot(value: SnapshotLike, settings=None) -> Snapshot:
    if isinstance(value, Snapshot):
        return value
    if isinstance(value, Graph):
        return SnapshotMetadataParser(value, settings=settings).parse()
    raise validation_error(
        f"Cannot combine a {type(value).__name__}, expected a Snapshot or a Graph",
        field="snapshot",
    )


def combine_snapshots(
    first: SnapshotLike,
    second: SnapshotLike,
    settings=None,
    metrics: Optional[MetricsCollector] = None,
) -> Snapshot:
    """Combine two non-materialized snapshots of the same stream.

    The snapshot with the later cutoff is the incremental one: the result
    takes its id, paths and cutoff. When both cutoffs are equal ``second``
    is treated as incremental.

    Args:
        first: Snapshot model or non-materialized snapshot graph
        second: Snapshot model or non-materialized snapshot graph
        settings: SnapshotSettings; the process singleton when omitted
        metrics: Collector receiving the counters of the selection pass

    Returns:
        Snapshot as of the later cutoff

    Raises:
        ConsistencyError: If the snapshots are of different streams
        SnapshotError: If either snapshot is materialized
    """
    if settings is None:
        from ldes_snapshot.settings import get_settings
        settings = get_settings()

    first = _as_snapshot(first, settings)
    second = _as_snapshot(second, settings)

    for snapshot in (first, second):
        if snapshot.materialized:
            raise validation_error(
                f"Snapshot {snapshot.id} is materialized and cannot be combined",
                field="materialized",
                value=snapshot.id,
            )

    if first.source_stream_id != second.source_stream_id:
        raise consistency_error(
            "Cannot combine snapshots of different event streams",
            expected=first.source_stream_id,
            actual=second.source_stream_id,
        )

    if first.cutoff > second.cutoff:
        base, incremental = second, first
    else:
        base, incremental = first, second

    config = ResolvedSelectionConfig(
        stream_id=incremental.source_stream_id,
        snapshot_id=incremental.id,
        cutoff=incremental.cutoff,
        version_path=incremental.version_path,
        timestamp_path=incremental.timestamp_path,
        materialized=False,
        timezone=settings.default_timezone,
    )

    with snapshot_operation_scope(
        "combine_snapshots",
        stream_id=config.stream_id,
        snapshot_id=config.snapshot_id,
        attributes={"base_id": base.id, "base_cutoff": base.cutoff.isoformat()},
    ):
        selector = SnapshotSelector(config, operation="combine_snapshots")
        members = list(base.members) + list(incremental.members)
        selected = tuple(selector.select(members))

        if metrics is not None:
            metrics.record_selection(selector.stats)

        logger.info(
            "Combined snapshot %s (%s) with %s (%s)",
            base.id,
            base.cutoff.isoformat(),
            incremental.id,
            incremental.cutoff.isoformat(),
        )

    return Snapshot(
        id=incremental.id,
        source_stream_id=incremental.source_stream_id,
        cutoff=incremental.cutoff,
        version_path=incremental.version_path,
        timestamp_path=incremental.timestamp_path,
        materialized=False,
        members=selected,
    )
