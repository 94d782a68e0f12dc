"""Protocols for dependency injection in the node controller."""

from typing import Protocol, runtime_checkable

from choicegraph.models.node import Graph, Session


@runtime_checkable
class StoreProtocol(Protocol):
    """Protocol for key-value stores holding the persisted graph."""

    def load(self) -> tuple[Graph, Session] | None:
        """Return the stored graph and session, or None if nothing is stored."""
        ...

    def save(self, graph: Graph, session: Session) -> bool:
        """Persist graph and session. Return True if anything changed."""
        ...
