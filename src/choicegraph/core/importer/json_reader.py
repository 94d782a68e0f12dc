"""Parse exported graph JSON into domain models, and back.

This is the system boundary: ids arrive as text or as JSON numbers and may
be malformed. Everything is normalized to canonical identifier strings here
so the tree code never has to deal with it.
"""

import re
from collections import Counter
from typing import Any

from choicegraph.config import DEFAULT_GRAPH_TITLE
from choicegraph.core.ids import id_sort_key
from choicegraph.errors import MalformedGraphError
from choicegraph.models.node import Choice, Graph, Node, Session

_IDENTIFIER_RE = re.compile(r"[1-9][0-9]*(?:\.[1-9][0-9]*)*")

SEED_DATA: dict[str, Any] = {
    "title": "Diagnosis: Application Not Working",
    "nodes": [
        {
            "id": "1",
            "title": "My application is not working",
            "body": "Starting point for debugging.",
            "choices": [{"label": "Check healthcheck", "to": "2"}],
        },
        {
            "id": "2",
            "title": "Check healthcheck",
            "body": "Call /health.",
            "choices": [
                {"label": "positive", "to": "3"},
                {"label": "negative", "to": "4"},
                {"label": "no response", "to": "5"},
            ],
        },
        {
            "id": "3",
            "title": "Check database availability",
            "body": "Log into DB; check connection.",
            "choices": [],
        },
        {
            "id": "4",
            "title": "Fix negative healthcheck",
            "body": "Collect logs, check dependencies.",
            "choices": [],
        },
        {
            "id": "5",
            "title": "Fix non-working healthcheck",
            "body": "Network/Ingress/Firewall; after fixing return to the problem.",
            "choices": [{"label": "return to start", "to": "1"}],
        },
    ],
}


def is_valid_identifier(value: str) -> bool:
    """True for dot-separated positive integers without leading zeros."""
    return _IDENTIFIER_RE.fullmatch(value) is not None


def parse_identifier(value: Any) -> str:
    """Normalize an id from JSON (text or integer) to its canonical string.

    Raises:
        MalformedGraphError: empty segments, non-positive or non-integer segments.
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        msg = f"Invalid identifier {value!r}: expected text or integer"
        raise MalformedGraphError(msg)
    text = str(value).strip()
    if not is_valid_identifier(text):
        msg = f"Invalid identifier {value!r}: segments must be positive integers"
        raise MalformedGraphError(msg)
    return text


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_choice(raw: Any) -> Choice:
    if not isinstance(raw, dict):
        msg = f"Invalid choice {raw!r}: expected an object"
        raise MalformedGraphError(msg)
    # Targets are kept verbatim (as text): dangling or empty references are
    # a reportable state, not an import failure.
    return Choice(label=_text(raw.get("label")), to=_text(raw.get("to")).strip())


def _parse_node(raw: Any) -> Node:
    if not isinstance(raw, dict):
        msg = f"Invalid node {raw!r}: expected an object"
        raise MalformedGraphError(msg)
    if "id" not in raw:
        msg = f"Node without id: {raw!r}"
        raise MalformedGraphError(msg)
    choices = raw.get("choices") or []
    if not isinstance(choices, list):
        msg = f"Invalid choices for node {raw['id']!r}: expected a list"
        raise MalformedGraphError(msg)
    return Node(
        id=parse_identifier(raw["id"]),
        title=_text(raw.get("title")),
        body=_text(raw.get("body")),
        choices=tuple(_parse_choice(c) for c in choices),
    )


def parse_nodes(raw_nodes: list[Any]) -> tuple[Node, ...]:
    """Parse a list of node records into Nodes sorted by id.

    Raises:
        MalformedGraphError: on malformed records or duplicate ids.
    """
    nodes = [_parse_node(raw) for raw in raw_nodes]
    counts = Counter(n.id for n in nodes)
    duplicates = sorted((i for i, c in counts.items() if c > 1), key=id_sort_key)
    if duplicates:
        msg = f"Duplicate node ids: {duplicates!r}"
        raise MalformedGraphError(msg)
    return tuple(sorted(nodes, key=lambda n: id_sort_key(n.id)))


def history_entry(node: Node, selected_choice: str | None = None) -> dict[str, Any]:
    """Build a session history entry for a visited node."""
    entry: dict[str, Any] = {
        "id": node.id,
        "title": node.title,
        "body": node.body,
        "comment": "",
        "tags": [],
    }
    if selected_choice:
        entry["selectedChoice"] = selected_choice
    return entry


def _parse_history(raw_history: list[Any], nodes: tuple[Node, ...]) -> tuple[dict[str, Any], ...]:
    by_id = {n.id: n for n in nodes}
    entries: list[dict[str, Any]] = []
    for item in raw_history:
        if isinstance(item, dict):
            entries.append(
                {
                    **item,
                    "id": _text(item.get("id")),
                    "title": _text(item.get("title")),
                    "body": _text(item.get("body")),
                    "comment": _text(item.get("comment")),
                    "tags": list(item.get("tags") or []),
                }
            )
        else:
            # Older exports stored history as a bare list of ids.
            node = by_id.get(_text(item))
            if node is not None:
                entries.append(history_entry(node))
            else:
                entries.append(
                    {"id": _text(item), "title": f"#{item}", "body": "", "comment": "", "tags": []}
                )
    return tuple(entries)


def _default_session(nodes: tuple[Node, ...]) -> Session:
    if not nodes:
        return Session()
    return Session(current_node_id=nodes[0].id, history=(history_entry(nodes[0]),))


def parse_graph_data(data: Any) -> tuple[Graph, Session]:
    """Parse exported JSON into a Graph and Session.

    Accepts the ``{"graph": ..., "session": ...}`` envelope, a bare
    ``{"title": ..., "nodes": [...]}`` graph, or a bare list of node records.

    Raises:
        MalformedGraphError: the shape is unrecognised or any record is invalid.
    """
    session_data: Any = None
    if isinstance(data, list):
        graph_data: Any = {"nodes": data}
    elif isinstance(data, dict) and isinstance(data.get("graph"), dict):
        graph_data = data["graph"]
        session_data = data.get("session")
    elif isinstance(data, dict):
        graph_data = data
    else:
        msg = "Invalid format: expected a graph object or a list of nodes"
        raise MalformedGraphError(msg)

    raw_nodes = graph_data.get("nodes")
    if not isinstance(raw_nodes, list):
        msg = "Invalid format: graph has no node list"
        raise MalformedGraphError(msg)

    nodes = parse_nodes(raw_nodes)
    graph = Graph(title=_text(graph_data.get("title")) or DEFAULT_GRAPH_TITLE, nodes=nodes)

    if isinstance(session_data, dict) and isinstance(session_data.get("history"), list):
        current = session_data.get("currentNodeId")
        session = Session(
            current_node_id=None if current is None else _text(current),
            history=_parse_history(session_data["history"], nodes),
        )
    else:
        session = _default_session(nodes)

    return graph, session


def nodes_to_data(nodes: tuple[Node, ...]) -> list[dict[str, Any]]:
    """Serialize nodes to the exchange record shape."""
    return [
        {
            "id": n.id,
            "title": n.title,
            "body": n.body,
            "choices": [{"label": c.label, "to": c.to} for c in n.choices],
        }
        for n in nodes
    ]


def graph_to_data(graph: Graph) -> dict[str, Any]:
    return {"title": graph.title, "nodes": nodes_to_data(graph.nodes)}


def session_to_data(session: Session) -> dict[str, Any]:
    return {"currentNodeId": session.current_node_id, "history": [dict(e) for e in session.history]}


def payload_to_data(graph: Graph, session: Session) -> dict[str, Any]:
    """Serialize graph and session to the persisted envelope."""
    return {"graph": graph_to_data(graph), "session": session_to_data(session)}


def seed_graph() -> tuple[Graph, Session]:
    """Return the starter graph shown to new users."""
    return parse_graph_data(SEED_DATA)
