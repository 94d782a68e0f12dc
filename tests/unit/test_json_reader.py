"""Tests for parsing exported graph JSON into domain models."""

import pytest

from choicegraph.core.importer.json_reader import (
    graph_to_data,
    is_valid_identifier,
    parse_graph_data,
    parse_identifier,
    payload_to_data,
    seed_graph,
)
from choicegraph.errors import MalformedGraphError
from choicegraph.models.node import Choice

MIXED_ID_GRAPH = {
    "title": "Mixed",
    "nodes": [
        {"id": 2, "title": "Second", "body": "b", "choices": [{"label": "back", "to": 1}]},
        {"id": "1", "title": "First", "body": "a", "choices": [{"label": "next", "to": "2"}]},
        {"id": "1.1", "title": "Child", "body": None},
    ],
}


def test_parse_normalizes_numeric_ids_and_sorts() -> None:
    graph, _session = parse_graph_data(MIXED_ID_GRAPH)

    assert graph.title == "Mixed"
    assert [n.id for n in graph.nodes] == ["1", "1.1", "2"]
    assert graph.nodes[2].choices == (Choice(label="back", to="1"),)
    assert graph.nodes[1].body == ""
    assert graph.nodes[1].choices == ()


def test_parse_accepts_bare_node_list() -> None:
    graph, session = parse_graph_data(MIXED_ID_GRAPH["nodes"])

    assert graph.title == "Graph"
    assert len(graph.nodes) == 3
    assert session.current_node_id == "1"
    assert session.history[0]["title"] == "First"


def test_parse_envelope_restores_session() -> None:
    data = {
        "graph": MIXED_ID_GRAPH,
        "session": {
            "currentNodeId": 2,
            "history": [{"id": "1", "title": "First", "body": "a", "comment": "hi"}],
        },
    }
    _graph, session = parse_graph_data(data)

    assert session.current_node_id == "2"
    assert session.history == (
        {"id": "1", "title": "First", "body": "a", "comment": "hi", "tags": []},
    )


def test_parse_migrates_legacy_history_of_ids() -> None:
    data = {"graph": MIXED_ID_GRAPH, "session": {"currentNodeId": "1", "history": ["1", 9]}}
    _graph, session = parse_graph_data(data)

    assert session.history[0]["title"] == "First"
    assert session.history[1] == {"id": "9", "title": "#9", "body": "", "comment": "", "tags": []}


@pytest.mark.parametrize(
    "value", ["", "1.", ".1", "1..2", "0", "1.0", "-1", "a", "01", 0, 1.5, True, None]
)
def test_parse_identifier_rejects_malformed(value: object) -> None:
    with pytest.raises(MalformedGraphError):
        parse_identifier(value)


def test_parse_identifier_accepts_text_and_integers() -> None:
    assert parse_identifier(3) == "3"
    assert parse_identifier(" 1.2.10 ") == "1.2.10"
    assert is_valid_identifier("12.3")
    assert not is_valid_identifier("12 .3")


def test_parse_rejects_duplicate_ids() -> None:
    with pytest.raises(MalformedGraphError, match="Duplicate"):
        parse_graph_data({"nodes": [{"id": "1"}, {"id": 1}]})


@pytest.mark.parametrize(
    "data",
    [
        "nodes",
        {"title": "no nodes"},
        {"nodes": [{"title": "no id"}]},
        {"nodes": [{"id": "1", "choices": "2"}]},
        {"nodes": [{"id": "1", "choices": ["2"]}]},
        {"nodes": ["1"]},
    ],
)
def test_parse_rejects_invalid_shapes(data: object) -> None:
    with pytest.raises(MalformedGraphError):
        parse_graph_data(data)


def test_dangling_and_empty_targets_survive_import() -> None:
    graph, _ = parse_graph_data(
        {"nodes": [{"id": "1", "choices": [{"label": "x", "to": "9"}, {"label": "y"}]}]}
    )
    assert [c.to for c in graph.nodes[0].choices] == ["9", ""]


def test_graph_to_data_matches_exchange_shape() -> None:
    graph, session = parse_graph_data(MIXED_ID_GRAPH)

    data = graph_to_data(graph)
    assert data["nodes"][0] == {
        "id": "1",
        "title": "First",
        "body": "a",
        "choices": [{"label": "next", "to": "2"}],
    }
    payload = payload_to_data(graph, session)
    assert parse_graph_data(payload) == (graph, session)


def test_seed_graph_is_well_formed() -> None:
    graph, session = seed_graph()
    assert [n.id for n in graph.nodes] == ["1", "2", "3", "4", "5"]
    assert session.current_node_id == "1"
