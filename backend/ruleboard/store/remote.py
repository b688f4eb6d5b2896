import logging

import requests

from ruleboard.diagram.schema import Graph
from ruleboard.errors import StorageReadError, StorageWriteError, ViewNotFound
from ruleboard.store.files import ROOT_VIEW_ID

logger = logging.getLogger(__name__)


class RemoteViewStore:
    """View store backed by a running ruleboard API instead of the local disk."""

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def load(self, view_id: str = ROOT_VIEW_ID) -> Graph:
        try:
            response = requests.get(
                f"{self.base_url}/api/architecture",
                params={"viewId": view_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[RemoteStore] GET view '%s' failed: %s", view_id, e)
            raise StorageReadError() from e

        if response.status_code == 404:
            raise ViewNotFound(view_id)
        if not response.ok:
            raise StorageReadError()

        try:
            return Graph.from_dict(response.json())
        except (KeyError, TypeError, ValueError) as e:
            raise StorageReadError() from e

    def save(self, view_id: str, graph: Graph) -> None:
        try:
            response = requests.post(
                f"{self.base_url}/api/architecture",
                params={"viewId": view_id},
                json=graph.to_dict(include_transient=False),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("[RemoteStore] POST view '%s' failed: %s", view_id, e)
            raise StorageWriteError() from e
