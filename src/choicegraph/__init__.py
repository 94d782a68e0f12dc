"""Decision-graph editing core: hierarchical ids, topology and node migration."""

from choicegraph.controller import NodeController
from choicegraph.core.tree.allocator import next_child_id, next_root_id
from choicegraph.core.tree.migration import MigrationResult, migrate, relabel
from choicegraph.errors import (
    CycleError,
    GraphError,
    IntegrityError,
    InvalidPositionError,
    MalformedGraphError,
    NodeNotFoundError,
)
from choicegraph.models.node import Choice, Graph, Node, Session
from choicegraph.protocols import StoreProtocol
from choicegraph.storage import GraphStore

__all__ = [
    "Choice",
    "CycleError",
    "Graph",
    "GraphError",
    "GraphStore",
    "IntegrityError",
    "InvalidPositionError",
    "MalformedGraphError",
    "MigrationResult",
    "Node",
    "NodeController",
    "NodeNotFoundError",
    "Session",
    "StoreProtocol",
    "migrate",
    "next_child_id",
    "next_root_id",
    "relabel",
]
