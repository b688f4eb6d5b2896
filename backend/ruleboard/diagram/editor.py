# backend/ruleboard/diagram/editor.py
"""
Diagram Editor - session-local mirror of one view's graph

Holds the working copy the user edits, the edit-mode toggle, the current
selection, the dirty flag and the drill-down navigation stack. Nothing reaches
the store until save() is called.

States:
- viewing: read-only, selection allowed
- editing: structural mutation allowed
"""

import logging
import random
import time
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, List, Optional, Protocol

from ruleboard.diagram.defaults import default_root_graph
from ruleboard.diagram.schema import (
    ComponentType,
    Edge,
    Graph,
    Node,
    NodeData,
    NodeKind,
    Position,
    Size,
)
from ruleboard.errors import (
    EditorError,
    EditorStateError,
    FactoryResetNotAllowed,
    StorageWriteError,
    ViewNotFound,
)
from ruleboard.store.files import ROOT_VIEW_ID, sanitize_view_id

logger = logging.getLogger(__name__)

GROUP_DEFAULT_SIZE = (300, 200)
SPAWN_OFFSET = 100
SPAWN_RANGE = 400


class GraphStore(Protocol):
    def load(self, view_id: str) -> Graph: ...

    def save(self, view_id: str, graph: Graph) -> None: ...


@dataclass
class Breadcrumb:
    id: str
    name: str


class DiagramEditor:
    def __init__(
        self,
        store: GraphStore,
        default_graph: Callable[[], Graph] = default_root_graph,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.default_graph = default_graph
        self.clock = clock
        self.rng = rng or random.Random()

        self.graph = Graph.empty()
        self.view_stack: List[Breadcrumb] = [Breadcrumb(id=ROOT_VIEW_ID, name="Root")]
        self.is_edit_mode = False
        self.is_dirty = False
        self.selected_node_id: Optional[str] = None
        self.selected_edge_id: Optional[str] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current_view_id(self) -> str:
        return self.view_stack[-1].id

    @property
    def is_root_view(self) -> bool:
        return sanitize_view_id(self.current_view_id) == ROOT_VIEW_ID

    @property
    def breadcrumbs(self) -> List[Breadcrumb]:
        return list(self.view_stack)

    @property
    def selected_node(self) -> Optional[Node]:
        if self.selected_node_id is None:
            return None
        return self.graph.find_node(self.selected_node_id)

    @property
    def selected_edge(self) -> Optional[Edge]:
        if self.selected_edge_id is None:
            return None
        return self.graph.find_edge(self.selected_edge_id)

    def toggle_edit_mode(self) -> bool:
        self.is_edit_mode = not self.is_edit_mode
        self._stamp_edit_mode()
        return self.is_edit_mode

    def _stamp_edit_mode(self) -> None:
        for node in self.graph.nodes:
            node.data.is_edit_mode = self.is_edit_mode

    def _require_edit_mode(self) -> None:
        if not self.is_edit_mode:
            raise EditorStateError()

    def _mark_dirty(self) -> None:
        self.is_dirty = True

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _fetch(self, view_id: str) -> Graph:
        try:
            return self.store.load(view_id)
        except ViewNotFound:
            logger.info("[Editor] No saved root view, using the built-in default")
            return self.default_graph()

    def load(self) -> Graph:
        """(Re)load the current view from the store, dropping local edits."""
        self._install(self._fetch(self.current_view_id))
        self.is_dirty = False
        return self.graph

    def _install(self, graph: Graph) -> None:
        self.graph = graph
        self.clear_selection()
        for node in self.graph.nodes:
            node.data.on_enter = partial(self.enter_group, node.id, node.data.label)
        self._stamp_edit_mode()

    def reset_to_saved(self) -> Graph:
        return self.load()

    def factory_reset(self) -> Graph:
        """Replace the root working copy with the built-in default. Not persisted until save()."""
        if not self.is_root_view:
            raise FactoryResetNotAllowed()
        self._install(self.default_graph())
        self._mark_dirty()
        return self.graph

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_node(self, node_id: str) -> None:
        if self.graph.find_node(node_id) is None:
            raise EditorError(f"Node '{node_id}' not found")
        self.selected_node_id = node_id
        self.selected_edge_id = None

    def select_edge(self, edge_id: str) -> None:
        if self.graph.find_edge(edge_id) is None:
            raise EditorError(f"Edge '{edge_id}' not found")
        self.selected_edge_id = edge_id
        self.selected_node_id = None

    def clear_selection(self) -> None:
        self.selected_node_id = None
        self.selected_edge_id = None

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def _new_id(self, prefix: str, taken: List[str]) -> str:
        stamp = int(self.clock() * 1000)
        candidate = f"{prefix}_{stamp}"
        while candidate in taken:
            stamp += 1
            candidate = f"{prefix}_{stamp}"
        return candidate

    def add_node(self, kind: str = "leaf") -> Node:
        self._require_edit_mode()
        kind = NodeKind(kind) if not isinstance(kind, NodeKind) else kind

        node_id = self._new_id("node", self.graph.node_ids())
        position = Position(
            x=self.rng.random() * SPAWN_RANGE + SPAWN_OFFSET,
            y=self.rng.random() * SPAWN_RANGE + SPAWN_OFFSET,
        )

        if kind == NodeKind.GROUP:
            node = Node(
                id=node_id,
                kind=kind,
                position=position,
                size=Size(*GROUP_DEFAULT_SIZE),
                data=NodeData(label="New Group"),
            )
        else:
            node = Node(
                id=node_id,
                kind=kind,
                position=position,
                data=NodeData(label="New Node", icon="Server", type=ComponentType.SERVICE),
            )

        node.data.is_edit_mode = self.is_edit_mode
        node.data.on_enter = partial(self.enter_group, node.id, node.data.label)
        self.graph.nodes.append(node)
        self._mark_dirty()
        return node

    def delete_selected(self) -> None:
        """Remove the selected node with its incident edges, or the selected edge."""
        self._require_edit_mode()

        if self.selected_node_id is not None:
            node_id = self.selected_node_id
            self.graph.nodes = [n for n in self.graph.nodes if n.id != node_id]
            self.graph.edges = [e for e in self.graph.edges if not e.touches(node_id)]
        elif self.selected_edge_id is not None:
            edge_id = self.selected_edge_id
            self.graph.edges = [e for e in self.graph.edges if e.id != edge_id]
        else:
            return

        self.clear_selection()
        self._mark_dirty()

    def update_node_field(self, key: str, value: Any) -> Node:
        self._require_edit_mode()
        node = self.selected_node
        if node is None:
            raise EditorError("No node selected")
        try:
            node.data.set_field(key, value)
        except KeyError:
            raise EditorError(f"Unknown node field '{key}'")
        if key == "label":
            node.data.on_enter = partial(self.enter_group, node.id, node.data.label)
        self._mark_dirty()
        return node

    def update_edge_field(self, key: str, value: Any) -> Edge:
        self._require_edit_mode()
        edge = self.selected_edge
        if edge is None:
            raise EditorError("No edge selected")
        try:
            edge.set_field(key, value)
        except KeyError:
            raise EditorError(f"Unknown edge field '{key}'")
        self._mark_dirty()
        return edge

    def connect(self, source_id: str, target_id: str) -> Edge:
        # Parallel edges between the same pair are allowed; only ids are unique
        self._require_edit_mode()
        edge = Edge(
            id=self._new_id("edge", self.graph.edge_ids()),
            source=source_id,
            target=target_id,
        )
        self.graph.edges.append(edge)
        self._mark_dirty()
        return edge

    def reconnect(self, edge_id: str, new_source: str, new_target: str) -> Edge:
        self._require_edit_mode()
        edge = self.graph.find_edge(edge_id)
        if edge is None:
            raise EditorError(f"Edge '{edge_id}' not found")
        edge.source = new_source
        edge.target = new_target
        self._mark_dirty()
        return edge

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        self._require_edit_mode()
        node = self.graph.find_node(node_id)
        if node is None:
            raise EditorError(f"Node '{node_id}' not found")
        node.position = Position(x, y)
        self._mark_dirty()
        return node

    def resize_node(self, node_id: str, width: float, height: float) -> Node:
        self._require_edit_mode()
        node = self.graph.find_node(node_id)
        if node is None:
            raise EditorError(f"Node '{node_id}' not found")
        node.size = Size(width, height)
        self._mark_dirty()
        return node

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _discard_warning(self) -> None:
        if self.is_dirty:
            logger.warning("[Editor] Leaving view '%s' with unsaved changes", self.current_view_id)

    def _switch_to(self, view_stack: List[Breadcrumb]) -> Graph:
        # A failed read leaves the stack and the graph on the current view
        graph = self._fetch(view_stack[-1].id)
        self._discard_warning()
        self.view_stack = view_stack
        self._install(graph)
        self.is_dirty = False
        return self.graph

    def enter_group(self, node_id: str, label: str) -> Graph:
        """Drill into the child view owned by `node_id`; the parent graph is untouched."""
        return self._switch_to(self.view_stack + [Breadcrumb(id=node_id, name=label)])

    def exit_group(self) -> Graph:
        if len(self.view_stack) == 1:
            return self.graph
        return self._switch_to(self.view_stack[:-1])

    def navigate_to(self, depth: int) -> Graph:
        """Jump back to breadcrumb `depth` (0 = root)."""
        if depth < 0 or depth >= len(self.view_stack):
            raise EditorError(f"No breadcrumb at depth {depth}")
        if depth == len(self.view_stack) - 1:
            return self.graph
        return self._switch_to(self.view_stack[:depth + 1])

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> Graph:
        """Copy of the working graph with session-only fields cleared."""
        return Graph.from_dict(self.graph.to_dict(include_transient=False))

    def save(self) -> None:
        try:
            self.store.save(self.current_view_id, self.snapshot())
        except StorageWriteError:
            logger.error("[Editor] Save failed for view '%s', changes kept locally", self.current_view_id)
            raise
        self.is_dirty = False
