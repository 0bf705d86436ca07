"""Snapshot model: the result of one selection pass."""

from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from pydantic import ConfigDict, field_validator
from rdflib import Graph, URIRef
from rdflib.term import Node

from ldes_snapshot.types.base import SnapshotBaseModel
from ldes_snapshot.types.member import ResolvedMember


class Snapshot(SnapshotBaseModel):
    """A point-in-time view of an event stream.

    ``members`` holds the selected version-records with their original,
    unmodified statements. Materialization happens when the snapshot is
    turned into a graph, so a non-materialized snapshot can always be fed
    back into another selection pass.

    Attributes:
        id: Identifier of the snapshot collection
        source_stream_id: Event stream the snapshot was taken from
        cutoff: Latest timestamp eligible for selection (aware UTC)
        version_path: Predicate linking a version to its object
        timestamp_path: Predicate giving a version's timestamp
        materialized: Whether the graph form is a version materialization
        members: Selected version-records, one per object
    """

    model_config = ConfigDict(frozen=True)

    id: Node
    source_stream_id: Node
    cutoff: datetime
    version_path: URIRef
    timestamp_path: URIRef
    materialized: bool = False
    members: Tuple[ResolvedMember, ...] = ()

    @field_validator("cutoff")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("cutoff must be timezone-aware")
        return value

    @property
    def selected(self) -> Dict[Node, ResolvedMember]:
        """Selected version per object id."""
        from ldes_snapshot.snapshot.selector import latest_versions

        return {member.object_id: member for member in latest_versions(self.members, self.cutoff)}

    def to_graph(
        self,
        graph: Optional[Graph] = None,
        on_header: Optional[Callable[[Graph], None]] = None,
    ) -> Graph:
        """Assemble the snapshot into a graph (materialized or not)."""
        from ldes_snapshot.snapshot.assembler import SnapshotAssembler

        return SnapshotAssembler.for_snapshot(self, on_header=on_header).assemble(self.members, graph=graph)
