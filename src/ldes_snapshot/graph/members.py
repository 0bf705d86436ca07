"""Slicing a flat graph into self-contained members.

Each member is the breadth-first closure of the statements reachable from
its id, stopping at the ids of the other top-level members of the same
collection so unrelated version-records do not get entangled.
"""

from collections import deque
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from rdflib import BNode, Graph, URIRef
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID, ConjunctiveGraph
from rdflib.term import Node

from ldes_snapshot.constants import TREE_MEMBER
from ldes_snapshot.logging import get_logger
from ldes_snapshot.types.member import Member, Statement

logger = get_logger(__name__)


def _statements_about(graph: Graph, subject: Node) -> Iterator[Statement]:
    if isinstance(graph, ConjunctiveGraph):
        for s, p, o, context in graph.quads((subject, None, None)):
            name = getattr(context, "identifier", context)
            yield Statement(s, p, o, None if name == DATASET_DEFAULT_GRAPH_ID else name)
    else:
        for s, p, o in graph.triples((subject, None, None)):
            yield Statement(s, p, o)


def member_ids(graph: Graph, collection_id: Node) -> List[Node]:
    """Containment targets of ``collection_id``, in first-seen order without duplicates."""
    return list(dict.fromkeys(graph.objects(collection_id, TREE_MEMBER)))


def extract_member(graph: Graph, member_id: Node, top_level: Optional[Set[Node]] = None) -> Member:
    """Extract the closed statement set of one member.

    Args:
        graph: Source graph
        member_id: Id of the member to extract
        top_level: Ids of all top-level members of the collection; these are
            never expanded into, except for ``member_id`` itself

    Returns:
        Member holding every statement reachable from ``member_id``
    """
    top_level = top_level or set()
    statements: List[Statement] = []
    seen: Set[Tuple[Node, Node, Node, Optional[Node]]] = set()
    visited: Set[Node] = {member_id}
    queue = deque([member_id])

    while queue:
        subject = queue.popleft()
        for statement in _statements_about(graph, subject):
            if statement in seen:
                continue
            seen.add(statement)
            statements.append(statement)

            target = statement.object
            if not isinstance(target, (URIRef, BNode)) or target in visited:
                continue
            if target in top_level:
                # another member of the collection
                continue
            visited.add(target)
            queue.append(target)

    return Member(id=member_id, statements=tuple(statements))


def iter_members(graph: Graph, collection_id: Node) -> Iterator[Member]:
    """Lazily extract the members of ``collection_id``.

    The iterator is single-use: each member is sliced out of the graph only
    when it is pulled.
    """
    ids = member_ids(graph, collection_id)
    top_level = set(ids)
    logger.debug("Extracting %d members of %s", len(ids), collection_id)
    for member_id in ids:
        yield extract_member(graph, member_id, top_level)


def extract_members(graph: Graph, collection_id: Node) -> List[Member]:
    return list(iter_members(graph, collection_id))


def members_to_graph(
    members: Iterable[Member],
    collection_id: Optional[Node] = None,
    graph: Optional[Graph] = None,
) -> Graph:
    """Write members back into a graph.

    Args:
        members: Members to add
        collection_id: When given, a containment statement from the
            collection to every member id is added as well
        graph: Target graph; a new one when omitted
    """
    graph = Graph() if graph is None else graph
    for member in members:
        member.add_to(graph)
        if collection_id is not None:
            graph.add((collection_id, TREE_MEMBER, member.id))
    return graph
