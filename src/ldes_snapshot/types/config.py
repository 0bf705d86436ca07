"""Selection configuration models.

``SelectionConfig`` is what callers pass: every field is optional.
``ResolvedSelectionConfig`` is the same configuration with every default
filled in exactly once per call. The selector only ever sees the resolved
form, so it never reads the clock or the settings itself.
"""

from datetime import datetime
from typing import Callable, Optional

import pytz
from pydantic import field_validator
from rdflib import BNode, URIRef
from rdflib.term import Node

from ldes_snapshot.common.exceptions import validation_error
from ldes_snapshot.types.base import SnapshotBaseModel
from ldes_snapshot.utils.datetime import ensure_utc, get_current_timestamp


class SelectionConfig(SnapshotBaseModel):
    """Caller-facing options for one selection pass.

    Attributes:
        stream_id: Event stream to select from (read from the graph when omitted)
        cutoff: Latest timestamp eligible for selection (now when omitted)
        snapshot_id: Identifier of the output collection (``<stream_id>Snapshot`` when omitted)
        version_path: Predicate linking a version to its object (read from the stream when omitted)
        timestamp_path: Predicate giving a version's timestamp (read from the stream when omitted)
        materialized: Produce a version materialization instead of a snapshot stream
    """

    stream_id: Optional[Node] = None
    cutoff: Optional[datetime] = None
    snapshot_id: Optional[Node] = None
    version_path: Optional[URIRef] = None
    timestamp_path: Optional[URIRef] = None
    materialized: Optional[bool] = None

    @field_validator("stream_id", "snapshot_id", "version_path", "timestamp_path", mode="before")
    @classmethod
    def _to_term(cls, value):
        if isinstance(value, str) and not isinstance(value, Node):
            return URIRef(value)
        return value


class ResolvedSelectionConfig(SnapshotBaseModel):
    """Selection configuration with all defaults applied."""

    stream_id: Node
    snapshot_id: Node
    cutoff: datetime
    version_path: URIRef
    timestamp_path: URIRef
    materialized: bool = False
    timezone: str = "UTC"

    @field_validator("cutoff")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("cutoff must be timezone-aware")
        return value

    @property
    def tzinfo(self):
        return pytz.timezone(self.timezone)

    @classmethod
    def resolve(
        cls,
        config: Optional[SelectionConfig],
        *,
        stream_id: Optional[Node] = None,
        version_path: Optional[Callable[[], URIRef]] = None,
        timestamp_path: Optional[Callable[[], URIRef]] = None,
        settings=None,
        clock: Callable[[], datetime] = get_current_timestamp,
    ) -> "ResolvedSelectionConfig":
        """Fill in every default of ``config``.

        Args:
            config: Caller options, may be None
            stream_id: Stream id used when the config names none
            version_path: Callable returning the stream's declared version path,
                only called when the config does not override it
            timestamp_path: Same for the timestamp path
            settings: SnapshotSettings; the process singleton when omitted
            clock: Source of the default cutoff

        Raises:
            SnapshotError: If a required value has no default
        """
        if settings is None:
            from ldes_snapshot.settings import get_settings
            settings = get_settings()
        config = config or SelectionConfig()

        resolved_stream = config.stream_id if config.stream_id is not None else stream_id
        if resolved_stream is None:
            raise validation_error("No event stream identifier given", field="stream_id")

        resolved_version = config.version_path
        if resolved_version is None:
            if version_path is None:
                raise validation_error("No version path given", field="version_path")
            resolved_version = version_path()

        resolved_timestamp = config.timestamp_path
        if resolved_timestamp is None:
            if timestamp_path is None:
                raise validation_error("No timestamp path given", field="timestamp_path")
            resolved_timestamp = timestamp_path()

        cutoff = config.cutoff if config.cutoff is not None else clock()

        return cls(
            stream_id=resolved_stream,
            snapshot_id=config.snapshot_id
            if config.snapshot_id is not None
            else derive_snapshot_id(resolved_stream, settings.snapshot_suffix),
            cutoff=ensure_utc(cutoff, settings.timezone),
            version_path=resolved_version,
            timestamp_path=resolved_timestamp,
            materialized=config.materialized if config.materialized is not None else settings.materialized,
            timezone=settings.default_timezone,
        )


def derive_snapshot_id(stream_id: Node, suffix: str = "Snapshot") -> Node:
    """``<stream_id><suffix>`` for IRIs; a fresh blank node otherwise."""
    if isinstance(stream_id, URIRef):
        return URIRef(f"{stream_id}{suffix}")
    return BNode()
