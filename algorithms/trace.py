"""
trace.py — Materialised Run
============================
Runs the Dijkstra generator to exhaustion and freezes the result.

Usage:
    trace = generate_trace(graph, "A")
    len(trace)               # number of steps
    trace[0].kind            # StepKind.INITIALIZE
    trace.final.distances    # final distance map
    trace.path_to("C")       # ['A', 'B', 'C']
    trace.to_dict()          # serialisable snapshot for the API / replay

A Trace is never mutated; a new graph or start node means a new Trace.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from graph import Graph
from algorithms.dijkstra import dijkstra
from algorithms.step import Step, StepKind, is_finite


@dataclass(frozen=True)
class Trace:
    """
    Attributes:
        graph      : The Graph the run was made on.
        start_node : Source node id.
        steps      : Every Step, in emission order.
    """

    graph:      Graph
    start_node: str
    steps:      Tuple[Step, ...]

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, idx: int) -> Step:
        return self.steps[idx]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def final(self) -> Step:
        return self.steps[-1]

    @property
    def has_unreachable(self) -> bool:
        return any(s.kind is StepKind.UNREACHABLE for s in self.steps)

    def kinds(self) -> List[StepKind]:
        return [s.kind for s in self.steps]

    def path_to(self, node_id: str) -> List[str]:
        """Shortest path start → node_id from the final predecessor map; [] if unreachable."""
        final = self.final
        if not is_finite(final.distances.get(node_id, 0)) or node_id not in final.previous:
            return []
        path, cur = [], node_id
        while cur is not None:
            path.append(cur)
            cur = final.previous[cur]
        path.reverse()
        return path

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_node":  self.start_node,
            "graph":       self.graph.to_dict(),
            "total_steps": len(self.steps),
            "steps":       [s.to_dict() for s in self.steps],
        }


def generate_trace(graph: Graph, start_node: str) -> Trace:
    """Pure: same graph + start node → identical Trace."""
    assert start_node in graph, f"start node {start_node!r} is not in the graph"
    return Trace(graph=graph, start_node=start_node, steps=tuple(dijkstra(graph, start_node)))
