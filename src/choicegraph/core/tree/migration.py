"""Move a node and its subtree, relabelling the whole graph.

A move is computed as a full relabel rather than an in-place patch:

1. Group every id under its parent (roots under ``None``), ordered by id.
2. Detach the moved id from its old parent and insert it under the new one.
3. Walk the grouping depth-first from the root level and hand out fresh,
   contiguous ids ("1", "2", ... then "N.1", "N.2", ...).
   Chains that never reach the root level are re-rooted after the roots.
4. Rewrite every node and every choice target through the old -> new map.

The input collection is never modified. On failure one of the errors in
``choicegraph.errors`` is raised and nothing is returned.
"""

import re
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from loguru import logger

from choicegraph.core.ids import id_sort_key, is_descendant, parent_of
from choicegraph.errors import CycleError, IntegrityError, InvalidPositionError, NodeNotFoundError
from choicegraph.models.node import Choice, Node

_POSITION_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of a successful move."""

    nodes: tuple[Node, ...]
    id_map: dict[str, str]
    moved_id: str
    orphans: tuple[str, ...] = ()


def _coerce_position(desired_position: int | str | None) -> int | None:
    if desired_position is None:
        return None
    if isinstance(desired_position, bool):
        raise InvalidPositionError(desired_position)
    if isinstance(desired_position, int):
        position = desired_position
    elif isinstance(desired_position, str):
        # ASCII digits only: int() would also take "1_0", padding and other scripts.
        if _POSITION_RE.fullmatch(desired_position) is None:
            raise InvalidPositionError(desired_position)
        position = int(desired_position)
    else:
        raise InvalidPositionError(desired_position)
    if position < 1:
        raise InvalidPositionError(desired_position)
    return position


def _group_by_parent(ids: Iterable[str]) -> dict[str | None, list[str]]:
    groups: dict[str | None, list[str]] = defaultdict(list)
    for node_id in sorted(ids, key=id_sort_key):
        groups[parent_of(node_id)].append(node_id)
    return groups


def _assign(
    groups: dict[str | None, list[str]],
    old_id: str,
    new_id: str,
    id_map: dict[str, str],
) -> None:
    """Give old_id the label new_id and number its subtree below it."""
    stack = [(old_id, new_id)]
    while stack:
        old, new = stack.pop()
        if old in id_map:
            msg = f"Node {old!r} reached twice while relabelling"
            logger.error(msg)
            raise IntegrityError(msg)
        id_map[old] = new
        for i, child in enumerate(groups.get(old, ()), start=1):
            stack.append((child, f"{new}.{i}"))


def relabel(
    nodes: Sequence[Node],
    node_id: str,
    new_parent_id: str | None,
    desired_position: int | str | None = None,
) -> MigrationResult:
    """Move node_id (with its subtree) under new_parent_id and renumber everything.

    Args:
        nodes: Current node collection. Not modified.
        node_id: The node to move.
        new_parent_id: Destination parent, or None for the root level.
        desired_position: 1-based slot among the destination's children.
            Clamped to the valid range; appended at the end when omitted.

    Returns:
        MigrationResult with the relabelled nodes (sorted by id) and the
        old -> new id mapping.

    Raises:
        NodeNotFoundError: node_id or new_parent_id does not exist.
        CycleError: new_parent_id is node_id or one of its descendants.
        InvalidPositionError: desired_position is not a positive integer.
        IntegrityError: the relabel could not produce a consistent result.
    """
    by_id = {n.id: n for n in nodes}
    if len(by_id) != len(nodes):
        msg = "Duplicate node ids in input collection"
        logger.error(msg)
        raise IntegrityError(msg)

    if node_id not in by_id:
        raise NodeNotFoundError(node_id)
    if new_parent_id is not None:
        if new_parent_id not in by_id:
            raise NodeNotFoundError(new_parent_id)
        if new_parent_id == node_id or is_descendant(new_parent_id, node_id):
            raise CycleError(node_id, new_parent_id)
    position = _coerce_position(desired_position)

    groups = _group_by_parent(by_id)

    # Only the moved id leaves its group; its own children stay keyed under it.
    groups[parent_of(node_id)].remove(node_id)
    target = groups[new_parent_id]
    if position is None:
        target.append(node_id)
    else:
        index = min(position, len(target) + 1) - 1
        target.insert(index, node_id)

    id_map: dict[str, str] = {}
    roots = groups.get(None, [])
    for i, root_id in enumerate(roots, start=1):
        _assign(groups, root_id, str(i), id_map)

    # Ids whose parent chain never reaches the root level (malformed input)
    # become extra roots, in their original id order. Only the top of each
    # such chain is re-rooted; the rest are reached through it.
    effective_parent = {child: parent for parent, kids in groups.items() for child in kids}
    next_root = len(roots) + 1
    orphans: list[str] = []
    for old_id in sorted(by_id, key=id_sort_key):
        if old_id in id_map or effective_parent.get(old_id) in by_id:
            continue
        orphans.append(old_id)
        _assign(groups, old_id, str(next_root), id_map)
        next_root += 1
    if orphans:
        logger.warning("Re-rooted {} orphaned node(s): {}", len(orphans), ", ".join(orphans))

    if len(id_map) != len(by_id) or len(set(id_map.values())) != len(id_map):
        msg = f"Relabel produced {len(set(id_map.values()))} ids for {len(by_id)} nodes"
        logger.error(msg)
        raise IntegrityError(msg)

    result = [
        replace(
            node,
            id=id_map[node.id],
            choices=tuple(Choice(label=c.label, to=id_map.get(c.to, c.to)) for c in node.choices),
        )
        for node in nodes
    ]
    result.sort(key=lambda n: id_sort_key(n.id))

    logger.debug(
        "Moved {} -> {} ({} ids changed)",
        node_id,
        id_map[node_id],
        sum(1 for old, new in id_map.items() if old != new),
    )
    return MigrationResult(
        nodes=tuple(result),
        id_map=id_map,
        moved_id=id_map[node_id],
        orphans=tuple(orphans),
    )


def migrate(
    nodes: Sequence[Node],
    node_id: str,
    new_parent_id: str | None,
    desired_position: int | str | None = None,
) -> tuple[Node, ...]:
    """Return a new, fully relabelled node collection with node_id moved.

    See :func:`relabel` for arguments and errors.
    """
    return relabel(nodes, node_id, new_parent_id, desired_position).nodes
