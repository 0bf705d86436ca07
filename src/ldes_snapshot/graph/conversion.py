"""Parse and serialize helpers around rdflib."""

from typing import Optional

from rdflib import Graph


def turtle_to_graph(text: str, base: Optional[str] = None) -> Graph:
    """Parse Turtle text into a new graph."""
    graph = Graph()
    graph.parse(data=text, format="turtle", publicID=base)
    return graph


def graph_to_turtle(graph: Graph) -> str:
    """Serialize a graph as Turtle."""
    return graph.serialize(format="turtle")
