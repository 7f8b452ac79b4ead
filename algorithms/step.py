"""
step.py — Algorithm Step Snapshot
==================================
The Dijkstra generator yields Step objects.  A Step is a frozen-in-time
picture of everything the visualizer needs to render one frame:

    • What kind of event just happened (select, check, update, …)
    • Which node is being processed and which edge is under test
    • Which nodes are already finalised
    • The full distance and predecessor maps
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened

Design decisions:
  - Step is a frozen dataclass whose containers are tuples and
    read-only mappings.  It is a SNAPSHOT: the generator mutates its
    own working maps, and StepBuilder copies them on every build() so an
    emitted Step never changes afterwards.
  - "Unreachable" is an explicit sentinel (`UNREACHABLE`), never
    float('inf'), so every finite distance stays an exact int.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Step kinds
# ---------------------------------------------------------------------------
class StepKind(Enum):
    INITIALIZE      = "INITIALIZE"
    SELECT_NODE     = "SELECT_NODE"
    UNREACHABLE     = "UNREACHABLE"
    NO_NEIGHBORS    = "NO_NEIGHBORS"
    CHECK_NEIGHBOR  = "CHECK_NEIGHBOR"
    UPDATE_DISTANCE = "UPDATE_DISTANCE"
    NO_UPDATE       = "NO_UPDATE"
    COMPLETE        = "COMPLETE"


# ---------------------------------------------------------------------------
# Distance sentinel
# ---------------------------------------------------------------------------
class Unreachable(Enum):
    """Single-member enum: the 'no finite distance known' value."""
    TOKEN = "∞"

    def __str__(self) -> str:
        return self.value


UNREACHABLE = Unreachable.TOKEN

Distance = Union[int, Unreachable]


def is_finite(distance: Distance) -> bool:
    return distance is not UNREACHABLE


def is_shorter(candidate: Distance, current: Distance) -> bool:
    """Strict less-than where UNREACHABLE sorts after every int."""
    if candidate is UNREACHABLE:
        return False
    if current is UNREACHABLE:
        return True
    return candidate < current


def _frozen_map(data: Mapping) -> Mapping:
    return MappingProxyType(dict(data))


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind             : StepKind of the event.
        current_node     : Node being processed (None for INITIALIZE /
                           UNREACHABLE / COMPLETE).
        visited          : Node ids finalised before this step, graph order.
        processing_edges : At most one (from, to) pair under examination.
        distances        : {node_id: int | UNREACHABLE}
        previous         : {node_id: predecessor id or None}
        explanation      : Human-readable "why" text.
        step_number      : 0-based index of this step in the trace.
        pseudocode_line  : Index into dijkstra.PSEUDOCODE.
    """

    kind:             StepKind
    current_node:     Optional[str]                  = None
    visited:          Tuple[str, ...]                = ()
    processing_edges: Tuple[Tuple[str, str], ...]    = ()
    distances:        Mapping[str, Distance]         = field(default_factory=lambda: MappingProxyType({}))
    previous:         Mapping[str, Optional[str]]    = field(default_factory=lambda: MappingProxyType({}))
    explanation:      str                            = ""
    step_number:      int                            = 0
    pseudocode_line:  int                            = 0

    @property
    def is_final(self) -> bool:
        return self.kind is StepKind.COMPLETE

    @property
    def processing_edge(self) -> Optional[Tuple[str, str]]:
        return self.processing_edges[0] if self.processing_edges else None

    def to_dict(self) -> dict:
        """JSON-friendly form; UNREACHABLE becomes None."""
        return {
            "kind":             self.kind.value,
            "step_number":      self.step_number,
            "current_node":     self.current_node,
            "visited":          list(self.visited),
            "processing_edges": [{"from": a, "to": b} for a, b in self.processing_edges],
            "distances":        {n: (d if is_finite(d) else None) for n, d in self.distances.items()},
            "previous":         dict(self.previous),
            "pseudocode_line":  self.pseudocode_line,
            "explanation":      self.explanation,
            "is_final":         self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so the algorithm doesn't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad holding the algorithm's live working state.

    The generator mutates `distances`, `previous` and `visited` in place
    and calls build() at every event; build() deep-copies them into an
    immutable Step and numbers it.

        sb = StepBuilder(graph.nodes, source="A")
        yield sb.build(StepKind.INITIALIZE, explanation="…")
        sb.distances["B"] = 4
        yield sb.build(StepKind.UPDATE_DISTANCE, current="A", edge=("A", "B"))
    """

    def __init__(self, nodes: Tuple[str, ...], source: str):
        self.nodes:     Tuple[str, ...]            = tuple(nodes)
        self.distances: Dict[str, Distance]        = {n: UNREACHABLE for n in self.nodes}
        self.previous:  Dict[str, Optional[str]]   = {n: None for n in self.nodes}
        self.visited:   List[str]                  = []
        self.distances[source] = 0
        self._count = 0

    def visit(self, node_id: str) -> None:
        if node_id not in self.visited:
            self.visited.append(node_id)

    def visit_all(self) -> None:
        self.visited = list(self.nodes)

    def build(
        self,
        kind: StepKind,
        current: Optional[str] = None,
        edge: Optional[Tuple[str, str]] = None,
        explanation: str = "",
        pseudocode_line: int = 0,
    ) -> Step:
        order = {n: i for i, n in enumerate(self.nodes)}
        step = Step(
            kind=kind,
            current_node=current,
            visited=tuple(sorted(self.visited, key=order.__getitem__)),
            processing_edges=(tuple(edge),) if edge else (),
            distances=_frozen_map(self.distances),
            previous=_frozen_map(self.previous),
            explanation=explanation,
            step_number=self._count,
            pseudocode_line=pseudocode_line,
        )
        self._count += 1
        return step
