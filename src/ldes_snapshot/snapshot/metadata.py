"""Reading stream declarations and snapshot headers back from graphs.

Every fact read here is single-valued: zero or several values is a
``StructuralError`` raised before any member is looked at.
"""

from datetime import datetime
from typing import Callable, List, Optional

from rdflib import Graph, URIRef
from rdflib.term import Node

from ldes_snapshot.common.exceptions import ErrorCode, structural_error
from ldes_snapshot.constants import (
    EVENT_STREAM,
    RDF_TYPE,
    SNAPSHOT_OF,
    SNAPSHOT_UNTIL,
    TIMESTAMP_PATH,
    VERSION_OF_PATH,
)
from ldes_snapshot.graph.members import iter_members
from ldes_snapshot.logging import get_logger
from ldes_snapshot.snapshot.selector import resolve_member
from ldes_snapshot.types.config import SelectionConfig, derive_snapshot_id
from ldes_snapshot.types.member import ResolvedMember
from ldes_snapshot.types.snapshot import Snapshot
from ldes_snapshot.utils.datetime import ensure_utc, from_datetime_literal, get_current_timestamp
from ldes_snapshot.utils.decorators import traced

logger = get_logger(__name__)


def _single_object(graph: Graph, subject: Node, predicate: URIRef, what: str) -> Node:
    values = list(dict.fromkeys(graph.objects(subject, predicate)))
    if len(values) != 1:
        raise structural_error(
            f"Found {len(values)} {what} for {subject}, expected exactly one",
            subject=subject,
            predicate=predicate,
            found=len(values),
        )
    return values[0]


def extract_stream_id(graph: Graph, stream_type: URIRef = EVENT_STREAM) -> Node:
    """Return the one subject typed ``stream_type`` in ``graph``.

    Raises:
        StructuralError: If there is no such subject, or more than one
    """
    candidates = list(dict.fromkeys(graph.subjects(RDF_TYPE, stream_type)))
    if len(candidates) != 1:
        raise structural_error(
            f"Found {len(candidates)} event streams, expected exactly one",
            predicate=RDF_TYPE,
            found=len(candidates),
            error_code=ErrorCode.STREAM_NOT_FOUND if not candidates else ErrorCode.AMBIGUOUS_STREAM,
            details={"stream_type": str(stream_type)},
        )
    return candidates[0]


def extract_version_path(graph: Graph, stream_id: Node) -> URIRef:
    return _single_object(graph, stream_id, VERSION_OF_PATH, "version paths")


def extract_timestamp_path(graph: Graph, stream_id: Node) -> URIRef:
    return _single_object(graph, stream_id, TIMESTAMP_PATH, "timestamp paths")


def extract_stream_options(graph: Graph, stream_id: Optional[Node] = None) -> SelectionConfig:
    """Read the stream declaration into a SelectionConfig.

    Args:
        graph: Graph holding the stream
        stream_id: Stream to read; looked up by type when omitted
    """
    stream_id = stream_id if stream_id is not None else extract_stream_id(graph)
    return SelectionConfig(
        stream_id=stream_id,
        version_path=extract_version_path(graph, stream_id),
        timestamp_path=extract_timestamp_path(graph, stream_id),
    )


class SnapshotMetadataParser:
    """Parse a non-materialized snapshot graph back into a Snapshot.

    Example:
        ```python
        snapshot = SnapshotMetadataParser(graph).parse()
        for object_id, member in snapshot.selected.items():
            print(object_id, member.timestamp)
        ```
    """

    def __init__(self, graph: Graph, snapshot_id: Optional[Node] = None, settings=None):
        self.graph = graph
        self.snapshot_id = snapshot_id
        if settings is None:
            from ldes_snapshot.settings import get_settings
            settings = get_settings()
        self.settings = settings

    def _parse_cutoff(self, snapshot_id: Node) -> datetime:
        value = _single_object(self.graph, snapshot_id, SNAPSHOT_UNTIL, "snapshot-until values")
        try:
            return from_datetime_literal(value, self.settings.timezone)
        except ValueError as exc:
            raise structural_error(
                f"Snapshot {snapshot_id} has an invalid cutoff",
                subject=snapshot_id,
                predicate=SNAPSHOT_UNTIL,
                error_code=ErrorCode.STRUCTURE_ERROR,
                details={"value": str(value)},
                cause=exc,
            )

    def _members(self, snapshot_id: Node, version_path: URIRef, timestamp_path: URIRef) -> List[ResolvedMember]:
        members: List[ResolvedMember] = []
        tz = self.settings.timezone
        for member in iter_members(self.graph, snapshot_id):
            resolution = resolve_member(member, version_path, timestamp_path, tz)
            if resolution.ok:
                members.append(resolution.resolved)
        return members

    @traced("ldes_snapshot.parse_snapshot")
    def parse(self) -> Snapshot:
        """Parse the snapshot.

        Raises:
            StructuralError: If the header is missing or ambiguous
        """
        snapshot_id = self.snapshot_id if self.snapshot_id is not None else extract_stream_id(self.graph)
        timestamp_path = extract_timestamp_path(self.graph, snapshot_id)
        version_path = extract_version_path(self.graph, snapshot_id)
        source = _single_object(self.graph, snapshot_id, SNAPSHOT_OF, "snapshot-of values")
        cutoff = self._parse_cutoff(snapshot_id)

        members = self._members(snapshot_id, version_path, timestamp_path)
        logger.debug("Parsed snapshot %s with %d members", snapshot_id, len(members))

        return Snapshot(
            id=snapshot_id,
            source_stream_id=source,
            cutoff=cutoff,
            version_path=version_path,
            timestamp_path=timestamp_path,
            materialized=False,
            members=tuple(members),
        )


def parse_snapshot(graph: Graph, snapshot_id: Optional[Node] = None, settings=None) -> Snapshot:
    return SnapshotMetadataParser(graph, snapshot_id, settings).parse()


def generate_snapshot_metadata(
    stream_id: Node,
    snapshot_id: Optional[Node] = None,
    cutoff: Optional[datetime] = None,
    version_path: Optional[URIRef] = None,
    timestamp_path: Optional[URIRef] = None,
    settings=None,
    clock: Callable[[], datetime] = get_current_timestamp,
) -> Snapshot:
    """Describe an empty snapshot of ``stream_id`` with every default filled in.

    Args:
        stream_id: Source event stream
        snapshot_id: Defaults to ``<stream_id><suffix>``
        cutoff: Defaults to ``clock()``
        version_path: Defaults to the configured default (dct:isVersionOf)
        timestamp_path: Defaults to the configured default (dct:created)
        settings: SnapshotSettings; the process singleton when omitted
        clock: Source of the default cutoff
    """
    if settings is None:
        from ldes_snapshot.settings import get_settings
        settings = get_settings()

    return Snapshot(
        id=snapshot_id if snapshot_id is not None else derive_snapshot_id(stream_id, settings.snapshot_suffix),
        source_stream_id=stream_id,
        cutoff=ensure_utc(cutoff if cutoff is not None else clock(), settings.timezone),
        version_path=version_path if version_path is not None else URIRef(settings.default_version_path),
        timestamp_path=timestamp_path if timestamp_path is not None else URIRef(settings.default_timestamp_path),
        materialized=False,
    )
