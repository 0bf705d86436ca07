"""End-to-end snapshot creation from an event stream graph."""

from datetime import datetime
from typing import Callable, Optional, Union

from rdflib import Graph

from ldes_snapshot.common.exceptions import validation_error
from ldes_snapshot.graph.members import iter_members
from ldes_snapshot.logging import get_logger
from ldes_snapshot.monitoring.metrics import MetricsCollector
from ldes_snapshot.observability import snapshot_operation_scope
from ldes_snapshot.snapshot.assembler import HeaderCallback, SnapshotAssembler
from ldes_snapshot.snapshot.combiner import combine_snapshots
from ldes_snapshot.snapshot.metadata import (
    extract_stream_id,
    extract_timestamp_path,
    extract_version_path,
)
from ldes_snapshot.snapshot.selector import SnapshotSelector
from ldes_snapshot.types.config import ResolvedSelectionConfig, SelectionConfig
from ldes_snapshot.types.snapshot import Snapshot
from ldes_snapshot.utils.datetime import get_current_timestamp

logger = get_logger(__name__)


class SnapshotBuilder:
    """Create snapshots of the event stream held in a graph.

    The stream declaration is validated before any member is processed:
    a graph without exactly one event stream, or whose stream does not
    declare exactly one version path and timestamp path (unless the config
    overrides them), raises a ``StructuralError``.

    Example:
        ```python
        builder = SnapshotBuilder(graph)
        snapshot = builder.create(SelectionConfig(cutoff=datetime(2021, 12, 15, 11, tzinfo=timezone.utc)))
        output = snapshot.to_graph()

        # combine a fresh selection with an earlier snapshot
        later = SnapshotBuilder(new_pages).create(base=output)
        ```

    Attributes:
        graph: Graph holding the source event stream
        settings: SnapshotSettings used to resolve defaults
        clock: Source of the default cutoff
        metrics: Collector receiving the counters of every pass
    """

    def __init__(
        self,
        graph: Graph,
        settings=None,
        clock: Callable[[], datetime] = get_current_timestamp,
        metrics: Optional[MetricsCollector] = None,
    ):
        if settings is None:
            from ldes_snapshot.settings import get_settings
            settings = get_settings()
        self.graph = graph
        self.settings = settings
        self.clock = clock
        self.metrics = metrics if metrics is not None else MetricsCollector(settings)

    def resolve_config(self, config: Optional[SelectionConfig] = None) -> ResolvedSelectionConfig:
        """Fill in every default of ``config`` from the graph, the settings and the clock."""
        config = config or SelectionConfig()
        stream_id = config.stream_id if config.stream_id is not None else extract_stream_id(self.graph)
        return ResolvedSelectionConfig.resolve(
            config,
            stream_id=stream_id,
            version_path=lambda: extract_version_path(self.graph, stream_id),
            timestamp_path=lambda: extract_timestamp_path(self.graph, stream_id),
            settings=self.settings,
            clock=self.clock,
        )

    def create(
        self,
        config: Optional[SelectionConfig] = None,
        base: Optional[Union[Snapshot, Graph]] = None,
    ) -> Snapshot:
        """Select the snapshot of the stream.

        Args:
            config: Selection options; every field defaults
            base: Earlier non-materialized snapshot of the same stream. When
                given the new selection is combined with it.

        Returns:
            Snapshot model; call ``to_graph()`` for the output graph

        Raises:
            StructuralError: If the stream declaration is unusable
            ConsistencyError: If ``base`` is a snapshot of another stream
        """
        resolved = self.resolve_config(config)
        if base is not None and resolved.materialized:
            raise validation_error(
                "A materialized snapshot cannot be combined with a base snapshot",
                field="materialized",
            )

        with snapshot_operation_scope(
            "create_snapshot",
            stream_id=resolved.stream_id,
            snapshot_id=resolved.snapshot_id,
            attributes={"materialized": resolved.materialized, "cutoff": resolved.cutoff.isoformat()},
        ):
            selector = SnapshotSelector(resolved, operation="create_snapshot")
            selected = tuple(selector.select(iter_members(self.graph, resolved.stream_id)))
            self.metrics.record_selection(selector.stats)

            snapshot = Snapshot(
                id=resolved.snapshot_id,
                source_stream_id=resolved.stream_id,
                cutoff=resolved.cutoff,
                version_path=resolved.version_path,
                timestamp_path=resolved.timestamp_path,
                materialized=resolved.materialized,
                members=selected,
            )

            if base is not None:
                snapshot = combine_snapshots(base, snapshot, settings=self.settings, metrics=self.metrics)

        return snapshot

    def create_graph(
        self,
        config: Optional[SelectionConfig] = None,
        base: Optional[Union[Snapshot, Graph]] = None,
        on_header: Optional[HeaderCallback] = None,
    ) -> Graph:
        """Select and assemble the snapshot graph.

        Without ``base`` the selection streams straight into the assembler,
        so ``on_header`` fires before the first member is extracted.
        """
        if base is not None:
            return self.create(config, base=base).to_graph(on_header=on_header)

        resolved = self.resolve_config(config)
        with snapshot_operation_scope(
            "create_snapshot_graph",
            stream_id=resolved.stream_id,
            snapshot_id=resolved.snapshot_id,
            attributes={"materialized": resolved.materialized, "cutoff": resolved.cutoff.isoformat()},
        ):
            selector = SnapshotSelector(resolved, operation="create_snapshot_graph")
            assembler = SnapshotAssembler.from_config(resolved, on_header=on_header)
            output = assembler.assemble(selector.select(iter_members(self.graph, resolved.stream_id)))
            self.metrics.record_selection(selector.stats)

        return output
