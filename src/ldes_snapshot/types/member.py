"""Version-record models.

A ``Member`` is one version-record of an event stream: its identifier and
the closed set of statements describing that version. ``resolve_member``
in :mod:`ldes_snapshot.snapshot.selector` turns it into a
``MemberResolution``, which either carries a ``ResolvedMember`` (with the
derived object id and timestamp) or the ``MemberError`` explaining why the
record was rejected.
"""

from datetime import datetime
from typing import Any, List, NamedTuple, Optional, Tuple

from pydantic import ConfigDict, field_validator, model_validator
from rdflib import Graph
from rdflib.term import Node

from ldes_snapshot.common.exceptions import ErrorCode, MemberError, member_error
from ldes_snapshot.types.base import SnapshotBaseModel


class Statement(NamedTuple):
    """A single (subject, predicate, object, graph) statement.

    ``subject`` may be absent; ``resolved_subject`` then falls back to the
    graph the statement was found in.
    """

    subject: Optional[Node]
    predicate: Node
    object: Node
    graph: Optional[Node] = None

    @property
    def resolved_subject(self) -> Optional[Node]:
        return self.subject if self.subject is not None else self.graph

    @classmethod
    def coerce(cls, value: Any) -> "Statement":
        """Build a Statement from a Statement, triple or quad."""
        if isinstance(value, Statement):
            return value
        if isinstance(value, (tuple, list)) and len(value) in (3, 4):
            return cls(*value)
        raise ValueError(f"Not a statement: {value!r}")


class Member(SnapshotBaseModel):
    """One version-record and its closed statement set."""

    model_config = ConfigDict(frozen=True)

    id: Node
    statements: Tuple[Any, ...] = ()

    @field_validator("statements", mode="after")
    @classmethod
    def _coerce_statements(cls, value: Tuple[Any, ...]) -> Tuple[Statement, ...]:
        return tuple(Statement.coerce(item) for item in value)

    def subject_of(self, statement: Statement) -> Node:
        """Subject of ``statement``, falling back to its graph, then to the member id."""
        subject = statement.resolved_subject
        return self.id if subject is None else subject

    def about(self, subject: Optional[Node] = None) -> List[Statement]:
        """Statements whose subject is ``subject`` (the member id by default)."""
        subject = self.id if subject is None else subject
        return [st for st in self.statements if self.subject_of(st) == subject]

    def values(self, predicate: Node) -> List[Node]:
        """Objects of ``predicate`` on the member id."""
        return [st.object for st in self.about() if st.predicate == predicate]

    def add_to(self, graph: Graph) -> Graph:
        for statement in self.statements:
            graph.add((self.subject_of(statement), statement.predicate, statement.object))
        return graph


class ResolvedMember(Member):
    """A Member with its stable object id and timestamp derived."""

    object_id: Node
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware")
        return value

    @classmethod
    def from_member(cls, member: Member, object_id: Node, timestamp: datetime) -> "ResolvedMember":
        return cls(
            id=member.id,
            statements=member.statements,
            object_id=object_id,
            timestamp=timestamp,
        )


class MemberResolution(SnapshotBaseModel):
    """Result of validating a Member: exactly one of ``resolved`` / ``error``."""

    model_config = ConfigDict(frozen=True)

    member_id: Optional[Node] = None
    resolved: Optional[ResolvedMember] = None
    error: Optional[MemberError] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "MemberResolution":
        if (self.resolved is None) == (self.error is None):
            raise ValueError("a member resolution carries either a resolved member or an error")
        return self

    @property
    def ok(self) -> bool:
        return self.resolved is not None

    @classmethod
    def success(cls, resolved: ResolvedMember) -> "MemberResolution":
        return cls(member_id=resolved.id, resolved=resolved)

    @classmethod
    def failure(cls, member_id: Optional[Node], error: MemberError) -> "MemberResolution":
        return cls(member_id=member_id, error=error)


def as_member(value: Any) -> Member:
    """Build a Member from a Member or an ``(id, statements)`` pair.

    Raises:
        MemberError: If ``value`` cannot be read as a member
    """
    if isinstance(value, Member):
        return value
    try:
        member_id, statements = value
        return Member(id=member_id, statements=tuple(statements))
    except (TypeError, ValueError) as exc:
        raise member_error(
            f"Not a member: {type(value).__name__}",
            error_code=ErrorCode.INVALID_MEMBER,
            details={"value": repr(value)[:200]},
            cause=exc,
        )
