"""CLI for choicegraph: edit and reorganize a decision graph."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from choicegraph.config import (
    DEFAULT_GRAPH_TITLE,
    NEW_CHILD_TITLE,
    NEW_NODE_BODY,
    NEW_NODE_TITLE,
    resolve_data_file,
)
from choicegraph.controller import NodeController
from choicegraph.core.ids import id_sort_key
from choicegraph.core.importer.json_reader import parse_graph_data, payload_to_data, seed_graph
from choicegraph.core.tree.outline import render_outline
from choicegraph.core.validation import validate_graph
from choicegraph.errors import GraphError
from choicegraph.logging_config import configure_logging
from choicegraph.models.node import Graph, Session
from choicegraph.storage import GraphStore

app = typer.Typer(help="choicegraph: edit and reorganize decision graphs.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    data_file: Annotated[
        Path | None,
        typer.Option("--data-file", "-d", help="Graph store file"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = data_file or resolve_data_file()


def _open_controller(ctx: typer.Context) -> NodeController:
    """Open the store, raising if it does not hold a graph yet."""
    store = GraphStore(ctx.obj)
    loaded = store.load()
    if loaded is None:
        logger.error("No graph found in {}. Run 'init' or 'import' first.", store.path)
        raise typer.Exit(1)
    graph, session = loaded
    return NodeController(store, graph, session)


@app.command()
def init(
    ctx: typer.Context,
    title: str = typer.Option(DEFAULT_GRAPH_TITLE, "--title", "-t", help="Graph title"),
    seed: bool = typer.Option(False, "--seed", help="Start from the example graph"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing graph"),
) -> None:
    """Create a new graph in the store."""
    store = GraphStore(ctx.obj)
    if store.load() is not None and not force:
        logger.error("A graph already exists in {}. Use --force to replace it.", store.path)
        raise typer.Exit(1)

    graph, session = seed_graph() if seed else (Graph(title=title), Session())
    NodeController(store, graph, session).replace_graph(graph, session)
    typer.echo(f"Initialized {graph.title!r} in {store.path} ({len(graph.nodes)} nodes)")


@app.command(name="import")
def import_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="JSON file to import"),
) -> None:
    """Replace the stored graph with one read from a JSON export."""
    if not source.is_file():
        logger.error("File not found: {}", source)
        raise typer.Exit(1)
    try:
        graph, session = parse_graph_data(json.loads(source.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, GraphError) as e:
        logger.error("Import error: {}", e)
        raise typer.Exit(1) from None

    store = GraphStore(ctx.obj)
    NodeController(store, graph, session).replace_graph(graph, session)
    typer.echo(f"Imported {graph.title!r} ({len(graph.nodes)} nodes)")


@app.command()
def export(
    ctx: typer.Context,
    target: Annotated[
        Path | None,
        typer.Argument(help="Output file (default: stdout)"),
    ] = None,
    include_session: bool = typer.Option(
        True, "--session/--no-session", help="Include runner session in the export"
    ),
) -> None:
    """Export the stored graph as JSON."""
    controller = _open_controller(ctx)
    payload = payload_to_data(controller.graph, controller.session)
    data = payload if include_session else payload["graph"]
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if target is None:
        typer.echo(text)
    else:
        target.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Exported {len(controller.graph.nodes)} nodes to {target}")


@app.command(name="list")
def list_cmd(ctx: typer.Context) -> None:
    """List node ids and titles."""
    controller = _open_controller(ctx)
    typer.echo(f"{controller.graph.title} - {len(controller.graph.nodes)} nodes:\n")
    for node in controller.graph.nodes:
        typer.echo(f"  {node.id}  {node.title}")


@app.command()
def show(
    ctx: typer.Context,
    node_id: Annotated[
        str | None,
        typer.Argument(help="Subtree root (default: whole graph)"),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    bodies: bool = typer.Option(True, "--bodies/--no-bodies", help="Include node bodies"),
) -> None:
    """Show the graph, or one subtree, as an outline."""
    controller = _open_controller(ctx)
    md = render_outline(
        controller.graph.nodes, node_id=node_id, max_depth=max_depth, include_bodies=bodies
    )
    if node_id is not None and not md:
        typer.echo(f"Node '{node_id}' not found.")
        raise typer.Exit(1)
    typer.echo(md, nl=False)


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Option(NEW_NODE_TITLE, "--title", "-t", help="Node title"),
    body: str = typer.Option(NEW_NODE_BODY, "--body", "-b", help="Node body"),
) -> None:
    """Create a new root node."""
    node = _open_controller(ctx).create_node(title=title, body=body)
    typer.echo(f"Created node {node.id}")


@app.command(name="add-child")
def add_child(
    ctx: typer.Context,
    parent_id: str = typer.Argument(..., help="Parent node id"),
    title: str = typer.Option(NEW_CHILD_TITLE, "--title", "-t", help="Node title"),
    body: str = typer.Option(NEW_NODE_BODY, "--body", "-b", help="Node body"),
    label: str = typer.Option("", "--label", "-l", help="Label of the parent's choice"),
) -> None:
    """Create a child node and link its parent to it."""
    controller = _open_controller(ctx)
    try:
        node = controller.add_child(parent_id, title=title, body=body, label=label)
    except GraphError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    typer.echo(f"Created node {node.id}")


@app.command()
def clone(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., help="Node to copy"),
) -> None:
    """Copy a node (with its choices) into a new root slot."""
    controller = _open_controller(ctx)
    try:
        node = controller.clone_node(node_id)
    except GraphError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    typer.echo(f"Cloned {node_id} -> {node.id}")


@app.command()
def link(
    ctx: typer.Context,
    source_id: str = typer.Argument(..., help="Node that gets the choice"),
    target_id: str = typer.Argument(..., help="Node the choice leads to"),
    label: str = typer.Option("", "--label", "-l", help="Choice label"),
) -> None:
    """Add a choice from one node to another."""
    controller = _open_controller(ctx)
    try:
        controller.add_choice(source_id, target_id, label=label)
    except GraphError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    typer.echo(f"Linked {source_id} -> {target_id}")


@app.command()
def move(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., help="Node to move (with its subtree)"),
    parent: Annotated[
        str | None,
        typer.Option("--parent", "-p", help="New parent id (default: root level)"),
    ] = None,
    position: Annotated[
        int | None,
        typer.Option("--position", "-P", help="1-based position among the new siblings"),
    ] = None,
) -> None:
    """Move a node to a new parent or to the root level, renumbering ids."""
    controller = _open_controller(ctx)
    try:
        result = controller.move_node(node_id, parent, position)
    except GraphError as e:
        logger.error("Move failed: {}", e)
        raise typer.Exit(1) from None

    typer.echo(f"Moved {node_id} -> {result.moved_id}")
    for old, new in sorted(result.id_map.items(), key=lambda kv: id_sort_key(kv[1])):
        if old != new:
            logger.debug("  {} -> {}", old, new)


@app.command()
def delete(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., help="Node to delete (with its subtree)"),
) -> None:
    """Delete a node, its subtree and all choices pointing into them."""
    controller = _open_controller(ctx)
    try:
        removed = controller.delete_node(node_id)
    except GraphError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    typer.echo(f"Deleted {removed} node(s)")


@app.command()
def validate(ctx: typer.Context) -> None:
    """Check the graph for empty fields and broken references."""
    report = validate_graph(_open_controller(ctx).graph)
    if report.ok:
        typer.echo("OK")
        return
    for message in report.messages:
        typer.echo(f"  {message}")
    raise typer.Exit(1)
