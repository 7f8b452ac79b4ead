"""
parser.py — Text → Graph
=========================
Validates the two free-form text fields the user types and turns them
into a canonical `Graph`.

Grammar:
    nodes :  A, B, C            comma-separated, trimmed, unique
    edges :  A-B:5, B-C:3       <from>-<to>:<positive int>

Rules are checked token by token, in order; within one edge token the
order is shape → endpoints → weight.  The first failure wins and is
raised as a `GraphValidationError` subclass.  Nothing is logged and
nothing is mutated — the caller decides how to surface the message.
"""

import re
from typing import List, Optional, Tuple

from graph.edge import Edge
from graph.errors import (
    DuplicateNode,
    EmptyNodeList,
    GraphValidationError,
    InvalidWeight,
    MalformedEdge,
    UnknownNodeReference,
)
from graph.graph import Graph

# endpoints may not contain '-' or ':'; the weight part is validated separately
_EDGE_RE = re.compile(r"^([^-:]+)-([^-:]+):(.*)$")
_WEIGHT_RE = re.compile(r"^[0-9]+$")


def _split(text: str) -> List[str]:
    return [tok.strip() for tok in text.split(",") if tok.strip()]


def parse_nodes(node_text: str) -> List[str]:
    nodes = _split(node_text)
    if not nodes:
        raise EmptyNodeList()

    seen = set()
    for nid in nodes:
        if nid in seen:
            raise DuplicateNode(nid)
        seen.add(nid)
    return nodes


def parse_edge(token: str, known: set) -> Edge:
    match = _EDGE_RE.match(token)
    if not match:
        raise MalformedEdge(token)

    source, target, weight_text = (part.strip() for part in match.groups())
    if not source or not target:
        raise MalformedEdge(token)

    label = f"{source}-{target}"
    for nid in (source, target):
        if nid not in known:
            raise UnknownNodeReference(label, nid)

    if not _WEIGHT_RE.match(weight_text) or int(weight_text) <= 0:
        raise InvalidWeight(label)

    return Edge(source=source, target=target, weight=int(weight_text))


def parse_graph(node_text: str, edge_text: str) -> Graph:
    """Parse both fields; raises GraphValidationError on the first bad token."""
    nodes = parse_nodes(node_text)
    known = set(nodes)

    edges: List[Edge] = []
    if edge_text.strip():
        edges = [parse_edge(tok, known) for tok in _split(edge_text)]

    # Graph keeps the last weight given for a repeated (from, to) pair
    return Graph(nodes, edges)


def try_parse_graph(node_text: str, edge_text: str) -> Tuple[Optional[Graph], Optional[GraphValidationError]]:
    """Result-style wrapper: (graph, None) on success, (None, error) on failure."""
    try:
        return parse_graph(node_text, edge_text), None
    except GraphValidationError as err:
        return None, err
