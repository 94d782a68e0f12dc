"""Domain models for the decision graph."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Choice:
    """A labelled edge from one node to another node's id."""

    label: str
    to: str


@dataclass(frozen=True)
class Node:
    """A single node in the decision graph.

    The id doubles as the node's position in the hierarchy: "1.2" is the
    second child of "1".
    """

    id: str
    title: str
    body: str
    choices: tuple[Choice, ...] = ()


@dataclass(frozen=True)
class Graph:
    """A titled collection of nodes, unique by id."""

    title: str
    nodes: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Session:
    """Runner state persisted alongside the graph."""

    current_node_id: str | None = None
    history: tuple[dict[str, Any], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IncomingReference:
    """A choice somewhere in the graph that targets a given node."""

    source: Node
    choice: Choice
