"""Data models for ldes_snapshot."""

from .base import SnapshotBaseModel
from .config import ResolvedSelectionConfig, SelectionConfig, derive_snapshot_id
from .member import Member, MemberResolution, ResolvedMember, Statement, as_member
from .snapshot import Snapshot

__all__ = [
    "SnapshotBaseModel",
    "Statement",
    "Member",
    "ResolvedMember",
    "MemberResolution",
    "as_member",
    "SelectionConfig",
    "ResolvedSelectionConfig",
    "derive_snapshot_id",
    "Snapshot",
]
