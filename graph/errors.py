"""
errors.py — Graph Input Validation Errors
==========================================
Everything the parser can reject.  All errors share one base class so
callers can catch a single type and show `str(err)` to the user.

    try:
        g = parse_graph(nodes, edges)
    except GraphValidationError as err:
        flash(str(err))        # err.kind tells you which rule failed
"""

from typing import Optional


class GraphValidationError(ValueError):
    """Base class.  `kind` is a stable machine-readable name."""

    kind: str = "GraphValidationError"

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token

    def to_dict(self) -> dict:
        return {"error": str(self), "kind": self.kind, "token": self.token}


class EmptyNodeList(GraphValidationError):
    kind = "EmptyNodeList"

    def __init__(self):
        super().__init__("Please enter at least one node")


class DuplicateNode(GraphValidationError):
    kind = "DuplicateNode"

    def __init__(self, node: str):
        super().__init__(f"Duplicate node '{node}' is not allowed", token=node)
        self.node = node


class MalformedEdge(GraphValidationError):
    kind = "MalformedEdge"

    def __init__(self, token: str):
        super().__init__(f"Invalid edge format: '{token}'. Use format 'A-B:5'", token=token)


class UnknownNodeReference(GraphValidationError):
    kind = "UnknownNodeReference"

    def __init__(self, edge: str, node: str):
        super().__init__(f"Edge '{edge}' references unknown node '{node}'", token=edge)
        self.node = node


class InvalidWeight(GraphValidationError):
    kind = "InvalidWeight"

    def __init__(self, edge: str):
        super().__init__(
            f"Invalid weight for edge '{edge}': must be a positive integer",
            token=edge,
        )
