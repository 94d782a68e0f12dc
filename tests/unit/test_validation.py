"""Tests for graph validation."""

from choicegraph.core.validation import EmptyReference, validate_graph
from choicegraph.models.node import Choice, Graph, Node


def test_valid_graph_is_ok() -> None:
    graph = Graph(
        title="ok",
        nodes=(
            Node(id="1", title="A", body="a", choices=(Choice(label="go", to="2"),)),
            Node(id="2", title="B", body="b"),
        ),
    )
    report = validate_graph(graph)
    assert report.ok
    assert report.messages == ()


def test_reports_empty_fields_labels_and_references() -> None:
    graph = Graph(
        title="bad",
        nodes=(
            Node(
                id="1",
                title=" ",
                body="a",
                choices=(
                    Choice(label="", to="2"),
                    Choice(label="nowhere", to="7"),
                    Choice(label="", to=""),
                ),
            ),
            Node(id="2", title="B", body="b"),
        ),
    )

    report = validate_graph(graph)

    assert not report.ok
    assert report.messages == (
        "Empty fields in #1",
        "Empty label in #1",
        "Missing target 7 from #1",
        "Empty reference in #1",
    )
    assert report.empty_references == (
        EmptyReference(node_id="1", node_title=" ", choice_label="nowhere", target_id="7"),
        EmptyReference(node_id="1", node_title=" ", choice_label="(no label)"),
    )


def test_reports_duplicate_ids() -> None:
    graph = Graph(title="dup", nodes=(Node(id="1", title="A", body="a"),) * 2)
    assert "Duplicate IDs" in validate_graph(graph).messages
