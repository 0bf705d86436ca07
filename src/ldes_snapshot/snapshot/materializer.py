"""Version materialization of selected members.

Rewrites the statements of a selected version so they describe the stable
object rather than the version:

- the version-of statement becomes ``<object> dct:hasVersion <version>``
- every other statement on the version id (the timestamp included) is
  re-subjected to the object id
- statements about nested nodes are copied unchanged
- a statement without subject falls back to its graph, then to the object id
"""

from typing import List

from rdflib import URIRef

from ldes_snapshot.constants import HAS_VERSION
from ldes_snapshot.types.member import ResolvedMember, Statement


def materialize_member(member: ResolvedMember, version_path: URIRef) -> List[Statement]:
    """Return the materialized statements of ``member``.

    Args:
        member: Selected member with its object id
        version_path: Predicate linking the version to its object

    Returns:
        Statements with the object id as subject where they described the version
    """
    materialized: List[Statement] = []
    for statement in member.statements:
        subject = statement.resolved_subject
        if subject is None:
            subject = member.object_id

        if subject != member.id:
            materialized.append(Statement(subject, statement.predicate, statement.object))
        elif statement.predicate == version_path:
            materialized.append(Statement(member.object_id, HAS_VERSION, member.id))
        else:
            materialized.append(Statement(member.object_id, statement.predicate, statement.object))

    return materialized
