"""Graph health checks: duplicate ids, empty fields, dangling references."""

from dataclasses import dataclass

from choicegraph.models.node import Graph


@dataclass(frozen=True)
class EmptyReference:
    """A choice whose target is missing or does not resolve to a node."""

    node_id: str
    node_title: str
    choice_label: str
    target_id: str | None = None


@dataclass(frozen=True)
class ValidationReport:
    ok: bool
    messages: tuple[str, ...]
    empty_references: tuple[EmptyReference, ...] = ()


def validate_graph(graph: Graph) -> ValidationReport:
    """Check a graph and collect human-readable problems.

    Dangling references are reported, never repaired. Messages are
    de-duplicated in first-seen order.
    """
    ids = {n.id for n in graph.nodes}
    messages: list[str] = []
    empty_refs: list[EmptyReference] = []

    if len(ids) != len(graph.nodes):
        messages.append("Duplicate IDs")

    for node in graph.nodes:
        if not node.title.strip() or not node.body.strip():
            messages.append(f"Empty fields in #{node.id}")
        for choice in node.choices:
            label = choice.label.strip()
            if not label:
                messages.append(f"Empty label in #{node.id}")
            if not choice.to.strip():
                empty_refs.append(
                    EmptyReference(
                        node_id=node.id,
                        node_title=node.title,
                        choice_label=label or "(no label)",
                    )
                )
                messages.append(f"Empty reference in #{node.id}")
            elif choice.to not in ids:
                empty_refs.append(
                    EmptyReference(
                        node_id=node.id,
                        node_title=node.title,
                        choice_label=label or "(no label)",
                        target_id=choice.to,
                    )
                )
                messages.append(f"Missing target {choice.to} from #{node.id}")

    unique = tuple(dict.fromkeys(messages))
    return ValidationReport(ok=not unique, messages=unique, empty_references=tuple(empty_refs))
