"""
graph.py — Graph Container & Random Generator
==============================================
Single source of truth for the graph.  The trace generator and the
renderer both read from this object; nothing writes to it after
construction.

Responsibilities:
  1. Hold the ordered node list and the weighted adjacency map
  2. Adjacency queries                      (neighbours, weight, edges, …)
  3. Serialisation round-trip               (to_dict / from_dict, to_text)
  4. Random input generation                (text in the parser's grammar)

Design decisions:
  - Node order is insertion order and it MATTERS: the trace generator
    uses it to break ties between equally distant nodes.
  - `_adj[node_id] → {neighbour_id: weight}` keeps neighbours in the
    order the pair was first given.  Re-specifying a pair overwrites its
    weight in place (last write wins, position kept).
  - Immutable after __init__: accessors hand out copies or read-only
    views, so a Graph can be shared between a trace and the renderer.
"""

import random
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from graph.edge import Edge

EdgeLike = Union[Edge, Tuple[str, str, int]]

# ---------------------------------------------------------------------------
# Random generator bounds
# ---------------------------------------------------------------------------
RANDOM_NODE_RANGE:   Tuple[int, int] = (5, 7)
RANDOM_DEGREE_RANGE: Tuple[int, int] = (1, 3)
RANDOM_WEIGHT_RANGE: Tuple[int, int] = (1, 10)


class Graph:
    """
    Attributes:
        nodes      : tuple of node ids, insertion order
        adjacency  : read-only {node_id: {neighbour_id: weight}}
    """

    def __init__(self, nodes: Iterable[str], edges: Iterable[EdgeLike] = ()):
        node_list = list(nodes)
        if len(set(node_list)) != len(node_list):
            raise ValueError("Graph nodes must be unique")

        self._nodes: Tuple[str, ...] = tuple(node_list)
        self._adj:   Dict[str, Dict[str, int]] = {nid: {} for nid in self._nodes}

        for edge in edges:
            if isinstance(edge, Edge):
                source, target, weight = edge.source, edge.target, edge.weight
            else:
                source, target, weight = edge
            if source not in self._adj or target not in self._adj:
                raise ValueError(f"Edge {source}-{target} references unknown node")
            if weight <= 0:
                raise ValueError(f"Edge {source}-{target} has non-positive weight {weight}")
            self._adj[source][target] = weight

    # ==================================================================
    # NODE QUERIES
    # ==================================================================
    @property
    def nodes(self) -> Tuple[str, ...]:
        return self._nodes

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._adj

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    @property
    def adjacency(self) -> Mapping[str, Mapping[str, int]]:
        return MappingProxyType({nid: MappingProxyType(nbrs) for nid, nbrs in self._adj.items()})

    def neighbours(self, node_id: str) -> List[Tuple[str, int]]:
        """Return [(neighbour_id, weight)] in adjacency insertion order."""
        return list(self._adj.get(node_id, {}).items())

    def weight(self, source: str, target: str) -> Optional[int]:
        return self._adj.get(source, {}).get(target)

    def edges(self) -> List[Edge]:
        return [
            Edge(source=src, target=tgt, weight=w)
            for src in self._nodes
            for tgt, w in self._adj[src].items()
        ]

    def out_degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, {}))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_text(self) -> Tuple[str, str]:
        """(node_text, edge_text) in the grammar the parser accepts."""
        node_text = ", ".join(self._nodes)
        edge_text = ", ".join(e.to_text() for e in self.edges())
        return node_text, edge_text

    def to_dict(self) -> dict:
        return {
            "nodes": list(self._nodes),
            "edges": [e.to_dict() for e in self.edges()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls(
            nodes=data.get("nodes", []),
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
        )

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._nodes == other._nodes and self.edges() == other.edges()

    def __hash__(self) -> int:
        return hash((self._nodes, tuple(self.edges())))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


# ---------------------------------------------------------------------------
# Random Graph  (text producer, re-validated by the parser)
# ---------------------------------------------------------------------------
def generate_random_graph(rng: Optional[random.Random] = None) -> Tuple[str, str]:
    """
    Random small directed graph as (node_text, edge_text).

    Nodes are lettered A, B, C, …; each node gets 1–3 outgoing edges to
    distinct other nodes (no self loops) with weights 1–10.  Pass a seeded
    `random.Random` for a reproducible graph.
    """
    rng = rng or random.Random()

    count = rng.randint(*RANDOM_NODE_RANGE)
    ids = [chr(ord("A") + i) for i in range(count)]

    edges: List[Edge] = []
    for nid in ids:
        wanted = rng.randint(*RANDOM_DEGREE_RANGE)
        candidates = [n for n in ids if n != nid]
        for _ in range(min(wanted, len(candidates))):
            target = candidates.pop(rng.randrange(len(candidates)))
            edges.append(Edge(source=nid, target=target, weight=rng.randint(*RANDOM_WEIGHT_RANGE)))

    return ", ".join(ids), ", ".join(e.to_text() for e in edges)
