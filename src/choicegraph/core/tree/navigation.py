"""Tree navigation: children, siblings, subtrees and incoming references.

Everything here is derived from the flat node collection on each call;
no parent/child pointers are stored anywhere.
"""

from collections.abc import Sequence

from choicegraph.core.ids import depth, id_sort_key, is_descendant, parent_of
from choicegraph.models.node import IncomingReference, Node


def find_node(nodes: Sequence[Node], node_id: str) -> Node | None:
    """Return the node with the given id, or None."""
    for node in nodes:
        if node.id == node_id:
            return node
    return None


def children_of(nodes: Sequence[Node], node_id: str) -> tuple[Node, ...]:
    """Get direct children of a node, ordered by id."""
    prefix = node_id + "."
    child_depth = depth(node_id) + 1
    children = [n for n in nodes if n.id.startswith(prefix) and depth(n.id) == child_depth]
    return tuple(sorted(children, key=lambda n: id_sort_key(n.id)))


def roots_of(nodes: Sequence[Node]) -> tuple[Node, ...]:
    """Get all root-level nodes, ordered by id."""
    roots = [n for n in nodes if parent_of(n.id) is None]
    return tuple(sorted(roots, key=lambda n: id_sort_key(n.id)))


def siblings_of(nodes: Sequence[Node], node_id: str) -> tuple[Node, ...]:
    """Get every node sharing node_id's parent, including the node itself.

    For a root id this is the whole root level.
    """
    parent_id = parent_of(node_id)
    if parent_id is None:
        return roots_of(nodes)
    return children_of(nodes, parent_id)


def next_sibling(nodes: Sequence[Node], node_id: str) -> str | None:
    """Id of the sibling right after node_id, or None at the end."""
    ids = [n.id for n in siblings_of(nodes, node_id)]
    if node_id not in ids:
        return None
    idx = ids.index(node_id)
    return ids[idx + 1] if idx < len(ids) - 1 else None


def prev_sibling(nodes: Sequence[Node], node_id: str) -> str | None:
    """Id of the sibling right before node_id, or None at the start."""
    ids = [n.id for n in siblings_of(nodes, node_id)]
    if node_id not in ids:
        return None
    idx = ids.index(node_id)
    return ids[idx - 1] if idx > 0 else None


def subtree_of(nodes: Sequence[Node], node_id: str) -> tuple[Node, ...]:
    """Get a node and all its descendants, ordered by id."""
    members = [n for n in nodes if n.id == node_id or is_descendant(n.id, node_id)]
    return tuple(sorted(members, key=lambda n: id_sort_key(n.id)))


def incoming_references(nodes: Sequence[Node], node_id: str) -> tuple[IncomingReference, ...]:
    """Find every choice, anywhere in the graph, whose target is node_id."""
    return tuple(
        IncomingReference(source=node, choice=choice)
        for node in nodes
        for choice in node.choices
        if choice.to == node_id
    )


def is_referenced(nodes: Sequence[Node], node_id: str) -> bool:
    return any(choice.to == node_id for node in nodes for choice in node.choices)
