# backend/ruleboard/store/views.py
"""
View Store - one JSON document per diagram view

The root view lives in `architecture.json`, every other view `X` in
`architecture_X.json`. Saves overwrite the whole document (last write wins).
"""

import logging
from pathlib import Path
from typing import List, Union

from ruleboard.diagram.schema import Graph
from ruleboard.errors import StorageReadError, ViewNotFound
from ruleboard.store.files import ROOT_VIEW_ID, read_json, sanitize_view_id, write_json

logger = logging.getLogger(__name__)

ROOT_FILE_NAME = "architecture.json"
VIEW_FILE_PREFIX = "architecture_"


class ViewStore:
    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path_for(self, view_id: str) -> Path:
        """File backing the raw, unsanitized `view_id`."""
        safe_id = sanitize_view_id(view_id)
        if safe_id == ROOT_VIEW_ID:
            return self.data_dir / ROOT_FILE_NAME
        return self.data_dir / f"{VIEW_FILE_PREFIX}{safe_id}.json"

    def exists(self, view_id: str) -> bool:
        return self.path_for(view_id).exists()

    def load(self, view_id: str = ROOT_VIEW_ID) -> Graph:
        """
        Load the graph for `view_id`.

        A missing sub-view is an empty graph. A missing root raises
        ViewNotFound so the caller can supply the factory default.
        """
        safe_id = sanitize_view_id(view_id)
        path = self.path_for(view_id)

        if not path.exists():
            if safe_id == ROOT_VIEW_ID:
                raise ViewNotFound(safe_id)
            return Graph.empty()

        raw = read_json(path)
        try:
            return Graph.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("[Store] Malformed graph document for view '%s': %s", safe_id, e)
            raise StorageReadError() from e

    def save(self, view_id: str, graph: Graph) -> None:
        safe_id = sanitize_view_id(view_id)
        write_json(self.path_for(view_id), graph.to_dict(include_transient=False))
        logger.info(
            "[Store] Saved view '%s' (%d nodes, %d edges)",
            safe_id, len(graph.nodes), len(graph.edges),
        )

    def list_views(self) -> List[str]:
        """Ids of every view with a document on disk, root first."""
        if not self.data_dir.exists():
            return []

        views = []
        if (self.data_dir / ROOT_FILE_NAME).exists():
            views.append(ROOT_VIEW_ID)
        for path in sorted(self.data_dir.glob(f"{VIEW_FILE_PREFIX}*.json")):
            views.append(path.stem[len(VIEW_FILE_PREFIX):])
        return views
