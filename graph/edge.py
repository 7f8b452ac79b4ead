"""
edge.py — Directed Weighted Edge
=================================
Value object for one directed connection.  Edges are produced by
`Graph.edges()` for renderers and serialisation; the graph itself
stores weights in its adjacency map, not Edge objects.

Design decisions:
  - `source` and `target` are node-id strings, NOT node objects.
    This keeps edges serialisable and avoids circular references.
  - Frozen: an Edge read from a Graph can never be used to change it.
  - Weights are strictly positive ints (validated by the parser).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the tail node.
        target : ID of the head node.
        weight : Positive integer cost.
    """

    source: str
    target: str
    weight: int

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def to_text(self) -> str:
        """Render in the input grammar, e.g. ``A-B:5``."""
        return f"{self.source}-{self.target}:{self.weight}"

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=int(data["weight"]),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"
