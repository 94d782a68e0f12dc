"""Render a graph or a subtree as an indented markdown outline."""

import io
from collections.abc import Sequence

from choicegraph.core.ids import depth, id_sort_key
from choicegraph.core.tree.navigation import children_of, subtree_of
from choicegraph.models.node import Node


def render_outline(
    nodes: Sequence[Node],
    *,
    node_id: str | None = None,
    max_depth: int | None = None,
    include_bodies: bool = True,
    include_choices: bool = True,
) -> str:
    """Render nodes as an indented bullet list.

    Args:
        nodes: Node collection.
        node_id: Root of the subtree to render (None = whole graph).
        max_depth: Max levels below the start to include (None = unlimited).
        include_bodies: Whether to include node bodies.
        include_choices: Whether to list each node's choices.

    Returns:
        Markdown string, or "" if node_id is given but does not exist.
    """
    if node_id is None:
        selected = sorted(nodes, key=lambda n: id_sort_key(n.id))
        start_depth = 0
    else:
        selected = list(subtree_of(nodes, node_id))
        if not selected:
            return ""
        start_depth = depth(node_id)

    max_absolute_depth = start_depth + max_depth if max_depth is not None else None

    out = io.StringIO()
    for node in selected:
        node_depth = depth(node.id)
        if max_absolute_depth is not None and node_depth > max_absolute_depth:
            continue
        indent = "    " * (node_depth - start_depth)
        out.write(f"{indent}- [{node.id}] {node.title}\n")

        if include_bodies and node.body:
            for body_line in node.body.split("\n"):
                out.write(f"{indent}  > {body_line}\n")

        if include_choices:
            for choice in node.choices:
                label = choice.label or "(no label)"
                out.write(f"{indent}  -> {label}: {choice.to or '(none)'}\n")

        # Truncation indicator when children are cut off by max_depth
        if max_absolute_depth is not None and node_depth == max_absolute_depth:
            child_count = len(children_of(nodes, node.id))
            if child_count:
                noun = "child" if child_count == 1 else "children"
                out.write(f"{indent}    - ... ({child_count} more {noun}, id={node.id})\n")

    return out.getvalue()
