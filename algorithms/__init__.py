"""
algorithms/
-----------
Dijkstra trace generation.

    from algorithms import generate_trace, Trace, Step, StepKind, UNREACHABLE

`dijkstra()` is the raw step generator; `generate_trace()` runs it to
completion and freezes the result into a Trace.
"""

from algorithms.step     import (
    Step,
    StepBuilder,
    StepKind,
    Unreachable,
    UNREACHABLE,
    Distance,
    is_finite,
    is_shorter,
)
from algorithms.dijkstra import dijkstra, PSEUDOCODE, PSEUDOCODE_LINES
from algorithms.trace    import Trace, generate_trace

__all__ = [
    "Step",
    "StepBuilder",
    "StepKind",
    "Unreachable",
    "UNREACHABLE",
    "Distance",
    "is_finite",
    "is_shorter",
    "dijkstra",
    "PSEUDOCODE",
    "PSEUDOCODE_LINES",
    "Trace",
    "generate_trace",
]
