"""Graph slicing and conversion helpers."""

from .conversion import graph_to_turtle, turtle_to_graph
from .members import extract_member, extract_members, iter_members, member_ids, members_to_graph

__all__ = [
    "member_ids",
    "extract_member",
    "extract_members",
    "iter_members",
    "members_to_graph",
    "turtle_to_graph",
    "graph_to_turtle",
]
