"""Snapshot selection, materialization, assembly and combination."""

from .assembler import SnapshotAssembler, create_snapshot_metadata
from .builder import SnapshotBuilder
from .combiner import combine_snapshots
from .materializer import materialize_member
from .metadata import (
    SnapshotMetadataParser,
    extract_stream_id,
    extract_stream_options,
    extract_timestamp_path,
    extract_version_path,
    generate_snapshot_metadata,
    parse_snapshot,
)
from .selector import SnapshotSelector, latest_versions, resolve_member

__all__ = [
    "SnapshotBuilder",
    "SnapshotSelector",
    "resolve_member",
    "latest_versions",
    "materialize_member",
    "SnapshotAssembler",
    "create_snapshot_metadata",
    "SnapshotMetadataParser",
    "parse_snapshot",
    "extract_stream_id",
    "extract_version_path",
    "extract_timestamp_path",
    "extract_stream_options",
    "generate_snapshot_metadata",
    "combine_snapshots",
]
