from ldes_snapshot.__version__ import __version__

from ldes_snapshot.common.exceptions import (
    ConsistencyError,
    ErrorCode,
    MemberError,
    SnapshotError,
    StructuralError,
)
from ldes_snapshot.logging import configure_logging
from ldes_snapshot.graph import (
    extract_members,
    graph_to_turtle,
    iter_members,
    members_to_graph,
    turtle_to_graph,
)
from ldes_snapshot.snapshot import (
    SnapshotAssembler,
    SnapshotBuilder,
    SnapshotMetadataParser,
    SnapshotSelector,
    combine_snapshots,
    create_snapshot_metadata,
    extract_stream_id,
    extract_stream_options,
    extract_timestamp_path,
    extract_version_path,
    generate_snapshot_metadata,
    materialize_member,
    parse_snapshot,
    resolve_member,
)
from ldes_snapshot.types import (
    Member,
    MemberResolution,
    ResolvedMember,
    ResolvedSelectionConfig,
    SelectionConfig,
    Snapshot,
    Statement,
)
from ldes_snapshot.utils import from_datetime_literal, get_current_timestamp, to_datetime_literal


__all__ = [
    "__version__",

    # Facade
    "SnapshotBuilder",
    "combine_snapshots",

    # Components
    "SnapshotSelector",
    "resolve_member",
    "materialize_member",
    "SnapshotAssembler",
    "create_snapshot_metadata",
    "SnapshotMetadataParser",
    "parse_snapshot",
    "generate_snapshot_metadata",
    "extract_stream_id",
    "extract_version_path",
    "extract_timestamp_path",
    "extract_stream_options",
    "iter_members",
    "extract_members",
    "members_to_graph",
    "turtle_to_graph",
    "graph_to_turtle",

    # Models
    "Statement",
    "Member",
    "ResolvedMember",
    "MemberResolution",
    "SelectionConfig",
    "ResolvedSelectionConfig",
    "Snapshot",

    # Exceptions (public API)
    "SnapshotError",
    "ErrorCode",
    "StructuralError",
    "MemberError",
    "ConsistencyError",

    # Logging
    "configure_logging",

    # Utils
    "get_current_timestamp",
    "to_datetime_literal",
    "from_datetime_literal",
]
