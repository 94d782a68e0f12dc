"""Configuration constants for choicegraph."""

import os
from pathlib import Path

# Key under which the graph is stored in the data file.
STORAGE_KEY: str = "dd_graph_v1"

# Data file location. First file found is used; if none exists, the first
# candidate is created on first save.
DATA_FILES: list[Path] = [
    Path("~/.local/share/choicegraph/graph.json").expanduser(),
    Path("~/.config/choicegraph/graph.json").expanduser(),
]

DATA_FILE_ENV: str = "CHOICEGRAPH_DATA_FILE"

DEFAULT_GRAPH_TITLE: str = "Graph"
NEW_NODE_TITLE: str = "New Node"
NEW_CHILD_TITLE: str = "New Child Node"
NEW_NODE_BODY: str = "Description…"


def resolve_data_file() -> Path:
    """Return the data file to use.

    ``$CHOICEGRAPH_DATA_FILE`` wins; otherwise the first existing entry in
    DATA_FILES, falling back to the first candidate.
    """
    override = os.environ.get(DATA_FILE_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_FILES:
        if candidate.is_file():
            return candidate
    return DATA_FILES[0]
