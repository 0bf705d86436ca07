"""Assembly of snapshot graphs.

Two output shapes exist.

Non-materialized (a snapshot that is itself an event stream)::

    <snapshot> a ldes:EventStream ;
        ldes:versionOfPath <versionPath> ;
        ldes:timestampPath <timestampPath> ;
        ldes:snapshotOf <stream> ;
        ldes:snapshotUntil "cutoff"^^xsd:dateTime ;
        tree:member <version> .
    # + the full, unmodified statements of every selected version

Materialized (a version materialization)::

    <snapshot> a tree:Collection ;
        ldes:versionMaterializationOf <stream> ;
        ldes:versionMaterializationUntil "cutoff"^^xsd:dateTime ;
        tree:member <object> .
    # + the materialized statements of every selected version
"""

from datetime import datetime
from typing import Callable, Iterable, Optional

from rdflib import Graph, URIRef
from rdflib.term import Node

from ldes_snapshot.constants import (
    COLLECTION,
    EVENT_STREAM,
    RDF_TYPE,
    SNAPSHOT_OF,
    SNAPSHOT_UNTIL,
    TIMESTAMP_PATH,
    TREE_MEMBER,
    VERSION_MATERIALIZATION_OF,
    VERSION_MATERIALIZATION_UNTIL,
    VERSION_OF_PATH,
)
from ldes_snapshot.logging import get_logger
from ldes_snapshot.snapshot.materializer import materialize_member
from ldes_snapshot.types.config import ResolvedSelectionConfig
from ldes_snapshot.types.member import ResolvedMember
from ldes_snapshot.types.snapshot import Snapshot
from ldes_snapshot.utils.datetime import to_datetime_literal

logger = get_logger(__name__)

HeaderCallback = Callable[[Graph], None]


def create_snapshot_metadata(
    snapshot_id: Node,
    stream_id: Node,
    cutoff: datetime,
    version_path: Optional[URIRef] = None,
    timestamp_path: Optional[URIRef] = None,
    materialized: bool = False,
) -> Graph:
    """Build the header statements of a snapshot.

    Args:
        snapshot_id: Identifier of the snapshot collection
        stream_id: Source event stream
        cutoff: Snapshot cutoff
        version_path: Declared on non-materialized snapshots
        timestamp_path: Declared on non-materialized snapshots
        materialized: Selects the header shape

    Returns:
        Graph holding only the header statements
    """
    header = Graph()
    until = to_datetime_literal(cutoff)

    if materialized:
        header.add((snapshot_id, RDF_TYPE, COLLECTION))
        header.add((snapshot_id, VERSION_MATERIALIZATION_OF, stream_id))
        header.add((snapshot_id, VERSION_MATERIALIZATION_UNTIL, until))
        return header

    header.add((snapshot_id, RDF_TYPE, EVENT_STREAM))
    if version_path is not None:
        header.add((snapshot_id, VERSION_OF_PATH, version_path))
    if timestamp_path is not None:
        header.add((snapshot_id, TIMESTAMP_PATH, timestamp_path))
    header.add((snapshot_id, SNAPSHOT_OF, stream_id))
    header.add((snapshot_id, SNAPSHOT_UNTIL, until))
    return header


class SnapshotAssembler:
    """Builds the output graph of a selection pass.

    The header-ready callback fires exactly once, before the first selected
    record is pulled from ``records`` (and also when there are none).
    """

    def __init__(
        self,
        snapshot_id: Node,
        stream_id: Node,
        cutoff: datetime,
        version_path: URIRef,
        timestamp_path: URIRef,
        materialized: bool = False,
        on_header: Optional[HeaderCallback] = None,
    ):
        self.snapshot_id = snapshot_id
        self.stream_id = stream_id
        self.cutoff = cutoff
        self.version_path = version_path
        self.timestamp_path = timestamp_path
        self.materialized = materialized
        self.on_header = on_header

    @classmethod
    def from_config(
        cls, config: ResolvedSelectionConfig, on_header: Optional[HeaderCallback] = None
    ) -> "SnapshotAssembler":
        return cls(
            snapshot_id=config.snapshot_id,
            stream_id=config.stream_id,
            cutoff=config.cutoff,
            version_path=config.version_path,
            timestamp_path=config.timestamp_path,
            materialized=config.materialized,
            on_header=on_header,
        )

    @classmethod
    def for_snapshot(cls, snapshot: Snapshot, on_header: Optional[HeaderCallback] = None) -> "SnapshotAssembler":
        return cls(
            snapshot_id=snapshot.id,
            stream_id=snapshot.source_stream_id,
            cutoff=snapshot.cutoff,
            version_path=snapshot.version_path,
            timestamp_path=snapshot.timestamp_path,
            materialized=snapshot.materialized,
            on_header=on_header,
        )

    def header(self) -> Graph:
        return create_snapshot_metadata(
            self.snapshot_id,
            self.stream_id,
            self.cutoff,
            version_path=self.version_path,
            timestamp_path=self.timestamp_path,
            materialized=self.materialized,
        )

    def add_record(self, graph: Graph, member: ResolvedMember) -> None:
        """Add one selected record to ``graph``."""
        if self.materialized:
            graph.add((self.snapshot_id, TREE_MEMBER, member.object_id))
            for statement in materialize_member(member, self.version_path):
                graph.add((statement.subject, statement.predicate, statement.object))
        else:
            graph.add((self.snapshot_id, TREE_MEMBER, member.id))
            member.add_to(graph)

    def assemble(self, records: Iterable[ResolvedMember], graph: Optional[Graph] = None) -> Graph:
        """Assemble header and records into one graph.

        Args:
            records: Selected records; may be a lazy selection pass
            graph: Target graph; a new one when omitted
        """
        header = self.header()
        if self.on_header is not None:
            self.on_header(header)

        output = Graph() if graph is None else graph
        output += header

        count = 0
        for member in records:
            self.add_record(output, member)
            count += 1

        logger.debug(
            "Assembled %s snapshot %s with %d records",
            "materialized" if self.materialized else "non-materialized",
            self.snapshot_id,
            count,
        )
        return output
