"""Node operations against the persisted graph, with change notification."""

from collections.abc import Callable
from dataclasses import replace

from loguru import logger

from choicegraph.config import DEFAULT_GRAPH_TITLE, NEW_CHILD_TITLE, NEW_NODE_BODY, NEW_NODE_TITLE
from choicegraph.core.ids import id_sort_key, is_descendant
from choicegraph.core.importer.json_reader import seed_graph
from choicegraph.core.tree.allocator import next_child_id, next_root_id
from choicegraph.core.tree.migration import MigrationResult, relabel
from choicegraph.core.tree.navigation import find_node
from choicegraph.errors import GraphError, NodeNotFoundError
from choicegraph.models.node import Choice, Graph, Node, Session
from choicegraph.protocols import StoreProtocol

Listener = Callable[[Graph], None]


def _sorted(nodes: list[Node] | tuple[Node, ...]) -> tuple[Node, ...]:
    return tuple(sorted(nodes, key=lambda n: id_sort_key(n.id)))


class NodeController:
    """Apply user-requested edits to the graph.

    Every successful edit builds a new Graph value, persists it through the
    store, then notifies subscribers. A failed edit raises and leaves both
    the in-memory and the persisted graph as they were.
    """

    def __init__(self, store: StoreProtocol, graph: Graph, session: Session | None = None) -> None:
        self.store = store
        self._graph = graph
        self._session = session or Session()
        self._listeners: list[Listener] = []

    @classmethod
    def open(cls, store: StoreProtocol, *, seed: bool = False) -> "NodeController":
        """Load the stored graph, or start an empty (or seeded) one."""
        loaded = store.load()
        if loaded is not None:
            graph, session = loaded
        elif seed:
            graph, session = seed_graph()
        else:
            graph, session = Graph(title=DEFAULT_GRAPH_TITLE), Session()
        return cls(store, graph, session)

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def session(self) -> Session:
        return self._session

    def subscribe(self, listener: Listener) -> None:
        """Call listener with the new graph after every successful change."""
        self._listeners.append(listener)

    def _require(self, node_id: str) -> Node:
        node = find_node(self._graph.nodes, node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def _commit(self, graph: Graph, session: Session | None = None) -> None:
        session = session or self._session
        self.store.save(graph, session)
        self._graph = graph
        self._session = session
        for listener in self._listeners:
            listener(graph)

    def replace_graph(self, graph: Graph, session: Session) -> None:
        """Swap in an imported graph wholesale."""
        self._commit(graph, session)
        logger.info("Loaded graph {!r} ({} nodes)", graph.title, len(graph.nodes))

    def create_node(self, *, title: str = NEW_NODE_TITLE, body: str = NEW_NODE_BODY) -> Node:
        """Append a new root node in the next free root slot."""
        node = Node(id=next_root_id(self._graph.nodes), title=title, body=body)
        self._commit(replace(self._graph, nodes=_sorted([*self._graph.nodes, node])))
        logger.debug("Created node {}", node.id)
        return node

    def add_child(
        self,
        parent_id: str,
        *,
        title: str = NEW_CHILD_TITLE,
        body: str = NEW_NODE_BODY,
        label: str = "",
    ) -> Node:
        """Create a child under parent_id and link the parent to it.

        Raises:
            NodeNotFoundError: parent_id does not exist.
        """
        parent = self._require(parent_id)
        child = Node(id=next_child_id(self._graph.nodes, parent_id), title=title, body=body)
        linked_parent = replace(parent, choices=(*parent.choices, Choice(label=label, to=child.id)))
        nodes = [linked_parent if n.id == parent_id else n for n in self._graph.nodes]
        nodes.append(child)
        self._commit(replace(self._graph, nodes=_sorted(nodes)))
        logger.debug("Created child {} under {}", child.id, parent_id)
        return child

    def clone_node(self, node_id: str) -> Node:
        """Copy node_id into the next free root slot, keeping its choices.

        Only the node itself is copied, not its subtree.

        Raises:
            NodeNotFoundError: node_id does not exist.
        """
        clone = replace(self._require(node_id), id=next_root_id(self._graph.nodes))
        self._commit(replace(self._graph, nodes=_sorted([*self._graph.nodes, clone])))
        logger.debug("Cloned {} to {}", node_id, clone.id)
        return clone

    def add_choice(self, source_id: str, target_id: str, *, label: str = "") -> Node:
        """Append a choice to source_id. The target is not required to exist."""
        source = self._require(source_id)
        updated = replace(source, choices=(*source.choices, Choice(label=label, to=target_id)))
        nodes = tuple(updated if n.id == source_id else n for n in self._graph.nodes)
        self._commit(replace(self._graph, nodes=nodes))
        return updated

    def move_node(
        self,
        node_id: str,
        new_parent_id: str | None = None,
        position: int | str | None = None,
    ) -> MigrationResult:
        """Move a node (and its subtree) under new_parent_id, or to the root level.

        Raises:
            NodeNotFoundError, CycleError, InvalidPositionError, IntegrityError:
                see :func:`choicegraph.core.tree.migration.relabel`.
        """
        try:
            result = relabel(self._graph.nodes, node_id, new_parent_id, position)
        except GraphError as e:
            logger.warning("Move failed: {}", e)
            raise

        current = self._session.current_node_id
        session = self._session
        if current is not None and current in result.id_map:
            session = replace(session, current_node_id=result.id_map[current])

        self._commit(replace(self._graph, nodes=result.nodes), session)
        logger.info("Moved {} to {}", node_id, result.moved_id)
        return result

    def delete_node(self, node_id: str) -> int:
        """Remove a node, its subtree, and every choice pointing into them.

        Remaining ids are left as they are; gaps are closed by the next move.

        Returns:
            Number of nodes removed.

        Raises:
            NodeNotFoundError: node_id does not exist.
        """
        self._require(node_id)

        def doomed(target: str) -> bool:
            return target == node_id or is_descendant(target, node_id)

        kept = tuple(
            replace(n, choices=tuple(c for c in n.choices if not doomed(c.to)))
            for n in self._graph.nodes
            if not doomed(n.id)
        )
        removed = len(self._graph.nodes) - len(kept)

        session = self._session
        if session.current_node_id is not None and doomed(session.current_node_id):
            session = Session()

        self._commit(replace(self._graph, nodes=kept), session)
        logger.info("Deleted {} ({} nodes)", node_id, removed)
        return removed
