"""Tests for the identifier allocator."""

from choicegraph.core.tree.allocator import next_child_id, next_root_id
from choicegraph.models.node import Node
from tests.unit.builders import make_nodes


def test_next_root_id_on_empty_collection() -> None:
    assert next_root_id(()) == "1"


def test_next_root_id_uses_max_not_count() -> None:
    nodes = make_nodes(("1", "a"), ("4", "b"), ("4.1", "c"))
    assert next_root_id(nodes) == "5"


def test_next_root_id_ignores_children_only_collection() -> None:
    nodes = make_nodes(("3.1", "orphan"))
    assert next_root_id(nodes) == "1"


def test_next_child_id_first_child(wide_nodes: tuple[Node, ...]) -> None:
    assert next_child_id(wide_nodes, "1.1") == "1.1.1"


def test_next_child_id_after_highest_child(wide_nodes: tuple[Node, ...]) -> None:
    assert next_child_id(wide_nodes, "1") == "1.4"
    assert next_child_id(wide_nodes, "2") == "2.3"


def test_next_child_id_skips_past_gap() -> None:
    nodes = make_nodes(("1", "a"), ("1.1", "b"), ("1.3", "c"))
    assert next_child_id(nodes, "1") == "1.4"
