"""Tests for tree navigation (children, siblings, references)."""

from choicegraph.core.tree.navigation import (
    children_of,
    find_node,
    incoming_references,
    is_referenced,
    next_sibling,
    prev_sibling,
    roots_of,
    siblings_of,
    subtree_of,
)
from choicegraph.models.node import Node
from tests.unit.builders import make_nodes


def _ids(nodes: tuple[Node, ...]) -> list[str]:
    return [n.id for n in nodes]


def test_children_are_direct_only_and_sorted(wide_nodes: tuple[Node, ...]) -> None:
    assert _ids(children_of(wide_nodes, "1")) == ["1.1", "1.2", "1.3"]
    assert _ids(children_of(wide_nodes, "1.2")) == ["1.2.1", "1.2.2"]
    assert children_of(wide_nodes, "1.1") == ()


def test_children_do_not_match_longer_prefix() -> None:
    nodes = make_nodes(("1", "a"), ("1.1", "b"), ("11", "c"), ("11.1", "d"))
    assert _ids(children_of(nodes, "1")) == ["1.1"]


def test_siblings_of_root_is_root_level(wide_nodes: tuple[Node, ...]) -> None:
    assert _ids(siblings_of(wide_nodes, "2")) == ["1", "2"]
    assert _ids(roots_of(wide_nodes)) == ["1", "2"]


def test_siblings_include_the_node_itself(wide_nodes: tuple[Node, ...]) -> None:
    assert _ids(siblings_of(wide_nodes, "1.2")) == ["1.1", "1.2", "1.3"]


def test_next_and_prev_sibling(wide_nodes: tuple[Node, ...]) -> None:
    assert next_sibling(wide_nodes, "1.1") == "1.2"
    assert next_sibling(wide_nodes, "1.3") is None
    assert prev_sibling(wide_nodes, "1.2") == "1.1"
    assert prev_sibling(wide_nodes, "1.1") is None
    assert next_sibling(wide_nodes, "1") == "2"


def test_subtree_of(wide_nodes: tuple[Node, ...]) -> None:
    assert _ids(subtree_of(wide_nodes, "1.2")) == ["1.2", "1.2.1", "1.2.2"]


def test_incoming_references(wide_nodes: tuple[Node, ...]) -> None:
    refs = incoming_references(wide_nodes, "1")
    assert [(r.source.id, r.choice.label) for r in refs] == [("1.2", "back"), ("2.1.1", "start")]
    assert is_referenced(wide_nodes, "1.3")
    assert not is_referenced(wide_nodes, "1.1")


def test_find_node(wide_nodes: tuple[Node, ...]) -> None:
    node = find_node(wide_nodes, "2.2")
    assert node is not None
    assert node.title == "O2"
    assert find_node(wide_nodes, "9") is None
