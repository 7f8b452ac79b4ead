"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based single-source Dijkstra with LINEAR-SCAN selection.

Yields a Step at:
  1. Initialise distances                            →  INITIALIZE
  2. Pick the closest unvisited node                 →  SELECT_NODE
     (nothing finite left                            →  UNREACHABLE, stop)
  3. Selected node has no outgoing edges             →  NO_NEIGHBORS
  4. Each unvisited neighbour                        →  CHECK_NEIGHBOR
  5. Relaxation result                               →  UPDATE_DISTANCE / NO_UPDATE
  6. Loop finished                                   →  COMPLETE

Selection scans the unvisited nodes in graph order and keeps the FIRST
node with the strictly smallest distance, so ties always go to the
earlier node.  O(V² + E); the graphs here are a handful of nodes and
determinism matters more than a heap.

Correctness note: weights are positive ints (the parser guarantees it).
"""

from typing import Dict, Generator, List, Optional

from graph import Graph
from algorithms.step import (
    UNREACHABLE,
    Distance,
    Step,
    StepBuilder,
    StepKind,
    is_finite,
    is_shorter,
)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                       # 0
    "    dist ← {v: ∞ for v in V};  dist[source] ← 0",    # 1
    "    unvisited ← V",                                  # 2
    "    while unvisited is not empty:",                  # 3
    "        u ← unvisited node with smallest dist",      # 4
    "        if dist[u] = ∞: break  # rest unreachable",  # 5
    "        remove u from unvisited",                    # 6
    "        for (v, w) in adj(u) if v in unvisited:",    # 7
    "            alt ← dist[u] + w",                      # 8
    "            if alt < dist[v]:",                      # 9
    "                dist[v] ← alt;  prev[v] ← u",        # 10
    "    return dist, prev",                              # 11
]

PSEUDOCODE_LINES: Dict[StepKind, int] = {
    StepKind.INITIALIZE:      1,
    StepKind.SELECT_NODE:     4,
    StepKind.UNREACHABLE:     5,
    StepKind.NO_NEIGHBORS:    7,
    StepKind.CHECK_NEIGHBOR:  8,
    StepKind.UPDATE_DISTANCE: 10,
    StepKind.NO_UPDATE:       9,
    StepKind.COMPLETE:        11,
}


def _select_closest(unvisited: List[str], dist: Dict[str, Distance]) -> Optional[str]:
    """First unvisited node (graph order) with the strictly smallest finite distance."""
    best: Optional[str] = None
    for node in unvisited:
        if best is None:
            if is_finite(dist[node]):
                best = node
        elif is_shorter(dist[node], dist[best]):
            best = node
    return best


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: str) -> Generator[Step, None, None]:
    assert source in graph, f"start node {source!r} is not in the graph"

    sb = StepBuilder(graph.nodes, source)
    dist = sb.distances
    prev = sb.previous
    unvisited: List[str] = list(graph.nodes)

    def emit(kind: StepKind, explanation: str, current: Optional[str] = None, edge=None) -> Step:
        return sb.build(
            kind,
            current=current,
            edge=edge,
            explanation=explanation,
            pseudocode_line=PSEUDOCODE_LINES[kind],
        )

    # --- init step ---
    yield emit(
        StepKind.INITIALIZE,
        f"Initializing Dijkstra's algorithm with start node {source}. "
        f"Distance to start is 0, all others are infinity.",
    )

    # --- main loop ---
    while unvisited:
        current = _select_closest(unvisited, dist)

        if current is None:
            yield emit(
                StepKind.UNREACHABLE,
                f"No unvisited node has a finite distance. "
                f"{', '.join(unvisited)} cannot be reached from {source}.",
            )
            break

        yield emit(
            StepKind.SELECT_NODE,
            f"Selected node {current} with current shortest distance {dist[current]}.",
            current=current,
        )
        unvisited.remove(current)
        sb.visit(current)

        if graph.out_degree(current) == 0:
            yield emit(
                StepKind.NO_NEIGHBORS,
                f"Node {current} has no outgoing edges.",
                current=current,
            )

        for nbr, weight in graph.neighbours(current):
            # already finalised, self loops included
            if nbr not in unvisited:
                continue

            edge = (current, nbr)
            yield emit(
                StepKind.CHECK_NEIGHBOR,
                f"Checking edge {current} → {nbr} with weight {weight}.",
                current=current,
                edge=edge,
            )

            old = dist[nbr]
            candidate = dist[current] + weight

            if is_shorter(candidate, old):
                dist[nbr] = candidate
                prev[nbr] = current
                yield emit(
                    StepKind.UPDATE_DISTANCE,
                    f"Found shorter path to {nbr}: {old} → {candidate} via {current} "
                    f"({dist[current]} + {weight}).",
                    current=current,
                    edge=edge,
                )
            else:
                yield emit(
                    StepKind.NO_UPDATE,
                    f"No update needed for {nbr}: current distance {old} is not "
                    f"improved by the new path {candidate} ({dist[current]} + {weight}).",
                    current=current,
                    edge=edge,
                )

    # --- final state ---
    sb.visit_all()
    if any(d is UNREACHABLE for d in dist.values()):
        summary = "All reachable nodes have been processed; some nodes are unreachable."
    else:
        summary = "All nodes have been processed."
    yield emit(StepKind.COMPLETE, f"Algorithm completed. {summary}")
