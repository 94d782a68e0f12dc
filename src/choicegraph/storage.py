"""JSON file store holding the graph under a fixed application key."""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from choicegraph.config import STORAGE_KEY
from choicegraph.core.importer.json_reader import parse_graph_data, payload_to_data
from choicegraph.errors import MalformedGraphError
from choicegraph.models.node import Graph, Session


class GraphStore:
    """Persist ``{graph, session}`` payloads in a JSON file keyed by app id.

    - Other keys in the file are left alone.
    - The file is not rewritten if the serialized contents are unchanged.
    - Writes go to a temporary file that replaces the original, so a crash
      never leaves a half-written store behind.
    """

    def __init__(self, path: str | Path, *, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            msg = f"Store {self.path} does not contain a JSON object"
            raise MalformedGraphError(msg)
        return data

    def load(self) -> tuple[Graph, Session] | None:
        """Load the stored graph.

        Returns None if the file or key is missing, or if the stored payload
        cannot be parsed (logged as a warning).
        """
        try:
            payload = self._read_all().get(self.key)
            if payload is None:
                return None
            return parse_graph_data(payload)
        except (json.JSONDecodeError, MalformedGraphError) as e:
            logger.warning("Ignoring unreadable store {}: {}", self.path, e)
            return None

    def save(self, graph: Graph, session: Session) -> bool:
        try:
            data = self._read_all()
        except (json.JSONDecodeError, MalformedGraphError):
            logger.warning("Overwriting unreadable store {}", self.path)
            data = {}

        data[self.key] = payload_to_data(graph, session)
        contents = json.dumps(data, ensure_ascii=False, indent=2) + "\n"

        if self.path.is_file() and self.path.read_text(encoding="utf-8") == contents:
            logger.debug("Store {} unchanged", self.path)
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(contents, encoding="utf-8")
            os.replace(tmp, self.path)
        finally:
            tmp.unlink(missing_ok=True)
        logger.debug("Saved {} nodes to {}", len(graph.nodes), self.path)
        return True
