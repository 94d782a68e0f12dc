"""Allocate fresh identifiers for new root and child nodes."""

from collections.abc import Sequence

from choicegraph.core.ids import last_segment
from choicegraph.core.tree.navigation import children_of, roots_of
from choicegraph.models.node import Node


def next_root_id(nodes: Sequence[Node]) -> str:
    """Return one past the highest root id, or "1" if there are no roots."""
    roots = roots_of(nodes)
    if not roots:
        return "1"
    return str(max(int(n.id) for n in roots) + 1)


def next_child_id(nodes: Sequence[Node], parent_id: str) -> str:
    """Return the next free child slot under parent_id.

    Slots are allocated past the highest existing child, so a gap left by a
    removed child is not reused here; the next migration closes it.
    """
    children = children_of(nodes, parent_id)
    if not children:
        return f"{parent_id}.1"
    return f"{parent_id}.{max(last_segment(n.id) for n in children) + 1}"
