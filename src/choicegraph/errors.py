"""Typed errors raised by graph operations."""


class GraphError(Exception):
    """Base class for all graph operation failures."""


class NodeNotFoundError(GraphError):
    """The node to move, or the destination parent, does not exist."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id!r}")


class CycleError(GraphError):
    """The destination parent is the moved node itself or one of its descendants."""

    def __init__(self, node_id: str, new_parent_id: str) -> None:
        self.node_id = node_id
        self.new_parent_id = new_parent_id
        super().__init__(
            f"Cannot move {node_id!r} under {new_parent_id!r}: "
            "destination is the node itself or one of its descendants"
        )


class InvalidPositionError(GraphError):
    """The desired sibling position is not a positive integer."""

    def __init__(self, position: object) -> None:
        self.position = position
        super().__init__(f"Position must be a positive integer, got {position!r}")


class IntegrityError(GraphError):
    """An internal invariant broke while relabelling. Indicates a defect, not bad input."""


class MalformedGraphError(GraphError, ValueError):
    """Externally supplied graph data failed validation at the import boundary."""
