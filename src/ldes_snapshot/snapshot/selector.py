"""Point-in-time selection over a stream of members.

The selector is a single fold over a pull-based, single-use sequence of
members. Per object id it keeps the member with the greatest timestamp not
after the cutoff; when two members of one object share a timestamp the one
seen first is kept. Malformed members are skipped, never fatal.
"""

import time
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, Optional

from rdflib import URIRef
from rdflib.term import Node

from ldes_snapshot.common.exceptions import ErrorCode, MemberError, member_error
from ldes_snapshot.logging import get_logger
from ldes_snapshot.monitoring.metrics import SelectionStats
from ldes_snapshot.types.config import ResolvedSelectionConfig
from ldes_snapshot.types.member import MemberResolution, ResolvedMember, as_member
from ldes_snapshot.utils.datetime import from_datetime_literal

logger = get_logger(__name__)


def resolve_member(
    value: Any,
    version_path: URIRef,
    timestamp_path: URIRef,
    tz: Optional[Any] = None,
) -> MemberResolution:
    """Derive the object id and timestamp of a member.

    Both must be given by exactly one statement on the member id. Values that
    cannot be read as a member at all fail the same way.

    Args:
        value: Member or ``(id, statements)`` pair to validate
        version_path: Predicate linking the member to its object id
        timestamp_path: Predicate giving the member's timestamp
        tz: pytz time zone for timestamps without an offset

    Returns:
        MemberResolution carrying either the ResolvedMember or a MemberError
    """
    try:
        member = as_member(value)
    except MemberError as error:
        return MemberResolution.failure(None, error)

    object_ids = member.values(version_path)
    if len(object_ids) != 1:
        return MemberResolution.failure(member.id, member_error(
            f"Member {member.id} has {len(object_ids)} {version_path} statements, expected exactly one",
            member_id=member.id,
            error_code=ErrorCode.MISSING_VERSION_OF if not object_ids else ErrorCode.AMBIGUOUS_VERSION_OF,
            details={"predicate": str(version_path), "found": len(object_ids)},
        ))

    timestamps = member.values(timestamp_path)
    if len(timestamps) != 1:
        return MemberResolution.failure(member.id, member_error(
            f"Member {member.id} has {len(timestamps)} {timestamp_path} statements, expected exactly one",
            member_id=member.id,
            error_code=ErrorCode.MISSING_TIMESTAMP if not timestamps else ErrorCode.AMBIGUOUS_TIMESTAMP,
            details={"predicate": str(timestamp_path), "found": len(timestamps)},
        ))

    try:
        timestamp = from_datetime_literal(timestamps[0], tz)
    except ValueError as exc:
        return MemberResolution.failure(member.id, member_error(
            f"Member {member.id} has an invalid timestamp",
            member_id=member.id,
            error_code=ErrorCode.INVALID_TIMESTAMP,
            details={"value": str(timestamps[0])},
            cause=exc,
        ))

    return MemberResolution.success(ResolvedMember.from_member(member, object_ids[0], timestamp))


def latest_versions(
    members: Iterable[ResolvedMember],
    cutoff: datetime,
    stats: Optional[SelectionStats] = None,
) -> Iterator[ResolvedMember]:
    """Fold resolved members into the latest version per object.

    Yields one member per object id once ``members`` is exhausted.
    """
    stats = stats if stats is not None else SelectionStats()
    selected: Dict[Node, ResolvedMember] = {}
    selected_timestamp: Dict[Node, datetime] = {}

    for member in members:
        if member.timestamp > cutoff:
            stats.too_recent += 1
            continue

        current = selected_timestamp.get(member.object_id)
        if current is None or current < member.timestamp:
            if current is not None:
                stats.superseded += 1
            selected[member.object_id] = member
            selected_timestamp[member.object_id] = member.timestamp
            stats.accepted += 1
        else:
            stats.outdated += 1

    for member in selected.values():
        stats.objects_selected += 1
        yield member


class SnapshotSelector:
    """Select the latest version per object under a cutoff.

    Attributes:
        config: Resolved selection configuration
        stats: Counters of the most recent pass
    """

    def __init__(self, config: ResolvedSelectionConfig, operation: str = "select"):
        self.config = config
        self.operation = operation
        self.stats = self._new_stats()

    def _new_stats(self) -> SelectionStats:
        return SelectionStats(
            operation=self.operation,
            stream_id=str(self.config.stream_id),
            snapshot_id=str(self.config.snapshot_id),
        )

    def resolve(self, members: Iterable[Any]) -> Iterator[ResolvedMember]:
        """Resolve members against the configured paths, skipping invalid ones."""
        tz = self.config.tzinfo
        for member in members:
            self.stats.members_seen += 1
            resolution = resolve_member(member, self.config.version_path, self.config.timestamp_path, tz)
            if resolution.ok:
                yield resolution.resolved
            else:
                self.stats.rejected += 1

    def select(self, members: Iterable[Any]) -> Iterator[ResolvedMember]:
        """Run one selection pass.

        Lazy: members are pulled one at a time and the selected records
        are produced once the input is exhausted. Each call starts a fresh
        pass with fresh counters.

        Args:
            members: Members (or ``(id, statements)`` pairs) in processing order

        Yields:
            One ResolvedMember per object id
        """
        self.stats = stats = self._new_stats()
        started = time.perf_counter()
        yield from latest_versions(self.resolve(members), self.config.cutoff, stats)
        stats.duration_seconds = time.perf_counter() - started
        logger.info(
            "Selected %d objects from %d members (%d rejected, %d too recent)",
            stats.objects_selected,
            stats.members_seen,
            stats.rejected,
            stats.too_recent,
        )
