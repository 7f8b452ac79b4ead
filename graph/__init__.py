"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Edge
    from graph import parse_graph, GraphValidationError
    from graph import generate_random_graph
"""

from graph.edge   import Edge
from graph.graph  import Graph, generate_random_graph
from graph.errors import (
    GraphValidationError,
    EmptyNodeList,
    DuplicateNode,
    MalformedEdge,
    UnknownNodeReference,
    InvalidWeight,
)
from graph.parser import parse_graph, try_parse_graph

__all__ = [
    "Edge",
    "Graph",
    "generate_random_graph",
    "GraphValidationError",
    "EmptyNodeList",
    "DuplicateNode",
    "MalformedEdge",
    "UnknownNodeReference",
    "InvalidWeight",
    "parse_graph",
    "try_parse_graph",
]
