"""Shared test fixtures."""

import pytest

from choicegraph.models.node import Graph, Node, Session
from tests.unit.builders import make_nodes
from tests.unit.fakes import FakeStore


@pytest.fixture
def reparent_nodes() -> tuple[Node, ...]:
    """Root 2 has a child; 1 and 3 point at 2."""
    return make_nodes(
        ("1", "A", [("to 2", "2")]),
        ("2", "B", [("to 2.1", "2.1")]),
        ("2.1", "B1"),
        ("3", "C", [("to B", "2")]),
    )


@pytest.fixture
def nested_nodes() -> tuple[Node, ...]:
    return make_nodes(
        ("1", "A"),
        ("1.1", "A1", [("to 1.1.1", "1.1.1")]),
        ("1.1.1", "A1a"),
        ("2", "B", [("to 1.1", "1.1")]),
    )


@pytest.fixture
def flat_nodes() -> tuple[Node, ...]:
    return make_nodes(("1", "car"), ("2", "home"), ("3", "dog"), ("4", "cat"), ("5", "cow"))


@pytest.fixture
def chain_nodes() -> tuple[Node, ...]:
    return make_nodes(("1", "A"), ("1.1", "A1"), ("1.1.1", "A1a"))


@pytest.fixture
def wide_nodes() -> tuple[Node, ...]:
    """Two roots with several children each, plus a dangling reference."""
    return make_nodes(
        ("1", "Start", [("go", "1.2"), ("other", "2"), ("broken", "9.9")]),
        ("1.1", "S1"),
        ("1.2", "S2", [("back", "1")]),
        ("1.2.1", "S2a", [("up", "1.2")]),
        ("1.2.2", "S2b"),
        ("1.3", "S3", [("deep", "2.1.1")]),
        ("2", "Other"),
        ("2.1", "O1"),
        ("2.1.1", "O1a", [("start", "1")]),
        ("2.2", "O2", [("sib", "1.3")]),
    )


@pytest.fixture
def fake_store(reparent_nodes: tuple[Node, ...]) -> FakeStore:
    return FakeStore(Graph(title="Test", nodes=reparent_nodes), Session(current_node_id="2"))
