"""Hierarchical identifier codec.

Identifiers are dot-separated positive integers ("1", "1.2", "1.2.3").
All functions here assume well-formed input; see
``choicegraph.core.importer.json_reader`` for boundary validation.
"""

from functools import cmp_to_key


def segments(node_id: str) -> list[int]:
    """Split an identifier into its integer segments."""
    return [int(part) for part in node_id.split(".")]


def compare_ids(a: str, b: str) -> int:
    """Order two identifiers segment by segment, as integers.

    Missing trailing segments count as 0, so "1" < "1.1" < "1.2" < "2" < "10".

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if equal.
    """
    a_parts = segments(a)
    b_parts = segments(b)
    for i in range(max(len(a_parts), len(b_parts))):
        a_val = a_parts[i] if i < len(a_parts) else 0
        b_val = b_parts[i] if i < len(b_parts) else 0
        if a_val != b_val:
            return a_val - b_val
    return 0


id_sort_key = cmp_to_key(compare_ids)


def parent_of(node_id: str) -> str | None:
    """Return the parent identifier, or None for a root identifier."""
    parent, dot, _ = node_id.rpartition(".")
    return parent if dot else None


def depth(node_id: str) -> int:
    """Number of segments minus one. Roots have depth 0."""
    return node_id.count(".")


def last_segment(node_id: str) -> int:
    return int(node_id.rpartition(".")[2])


def is_descendant(node_id: str, ancestor_id: str) -> bool:
    """True if ancestor_id is a strict dot-prefix of node_id."""
    return node_id.startswith(ancestor_id + ".")
