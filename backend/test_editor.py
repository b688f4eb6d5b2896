"""Tests for the diagram editor state machine"""

import json
import random

import pytest

from conftest import make_node
from ruleboard.diagram.defaults import default_root_graph
from ruleboard.diagram.editor import DiagramEditor
from ruleboard.diagram.schema import ComponentType, EdgeKind, Graph, NodeKind
from ruleboard.errors import (
    EditorError,
    EditorStateError,
    FactoryResetNotAllowed,
    StorageReadError,
    StorageWriteError,
)

FROZEN_NOW = 1700000000.0


@pytest.fixture
def editor(view_store):
    ed = DiagramEditor(view_store, clock=lambda: FROZEN_NOW, rng=random.Random(7))
    ed.load()
    return ed


def test_unsaved_root_loads_factory_default(editor):
    assert len(editor.graph.nodes) == 24
    assert len(editor.graph.edges) == 13
    assert editor.is_root_view
    assert editor.is_dirty is False
    assert [b.name for b in editor.breadcrumbs] == ["Root"]


def test_default_children_stay_inside_their_group():
    graph = default_root_graph()
    groups = {n.id for n in graph.nodes if n.kind == NodeKind.GROUP}
    assert groups == {"ui", "search", "eaip", "rms"}
    for node in graph.nodes:
        if node.parent_node is not None:
            assert node.parent_node in groups
            assert node.extent == "parent"


def test_default_graph_is_a_fresh_copy():
    first = default_root_graph()
    first.nodes[0].data.label = "changed"
    assert default_root_graph().nodes[0].data.label != "changed"


def test_mutations_require_edit_mode(editor):
    with pytest.raises(EditorStateError):
        editor.add_node()
    with pytest.raises(EditorStateError):
        editor.connect("cbs", "ums")
    with pytest.raises(EditorStateError):
        editor.move_node("cbs", 1, 1)
    assert editor.is_dirty is False


def test_toggle_edit_mode_stamps_every_node(editor):
    assert editor.toggle_edit_mode() is True
    assert all(n.data.is_edit_mode for n in editor.graph.nodes)
    assert editor.toggle_edit_mode() is False
    assert not any(n.data.is_edit_mode for n in editor.graph.nodes)


def test_add_node_ids_are_unique_within_one_millisecond(editor):
    editor.toggle_edit_mode()
    first = editor.add_node()
    second = editor.add_node()

    assert first.id == "node_1700000000000"
    assert second.id == "node_1700000000001"
    assert editor.is_dirty


def test_add_leaf_and_group_defaults(editor):
    editor.toggle_edit_mode()
    leaf = editor.add_node("leaf")
    group = editor.add_node("group")

    assert leaf.kind == NodeKind.LEAF
    assert leaf.data.label == "New Node"
    assert leaf.data.icon == "Server"
    assert leaf.data.type == ComponentType.SERVICE
    assert 100 <= leaf.position.x <= 500
    assert 100 <= leaf.position.y <= 500

    assert group.kind == NodeKind.GROUP
    assert group.data.label == "New Group"
    assert (group.size.width, group.size.height) == (300, 200)


def test_delete_node_cascades_to_incident_edges(editor):
    editor.toggle_edit_mode()
    editor.select_node("kafka")
    editor.delete_selected()

    assert editor.graph.find_node("kafka") is None
    assert len(editor.graph.nodes) == 23
    assert len(editor.graph.edges) == 10
    for edge_id in ("e2", "e3", "e4"):
        assert editor.graph.find_edge(edge_id) is None
    assert editor.selected_node_id is None


def test_delete_edge_only(editor):
    editor.toggle_edit_mode()
    editor.select_edge("e13")
    editor.delete_selected()

    assert editor.graph.find_edge("e13") is None
    assert editor.graph.find_node("central-engine") is not None
    assert len(editor.graph.nodes) == 24


def test_selection_is_exclusive(editor):
    editor.select_node("cbs")
    editor.select_edge("e1")
    assert editor.selected_node_id is None
    assert editor.selected_edge.id == "e1"

    with pytest.raises(EditorError):
        editor.select_node("nope")


def test_update_fields(editor):
    editor.toggle_edit_mode()
    editor.select_node("cbs")
    editor.update_node_field("subLabel", "Oracle only")
    editor.update_node_field("type", "database")
    assert editor.selected_node.data.sub_label == "Oracle only"

    with pytest.raises(EditorError):
        editor.update_node_field("colour", "red")

    editor.select_edge("e1")
    editor.update_edge_field("type", "step")
    editor.update_edge_field("label", "CDC")
    assert editor.selected_edge.kind == EdgeKind.STEP
    assert editor.selected_edge.label == "CDC"


def test_connect_allows_parallel_edges(editor):
    editor.toggle_edit_mode()
    first = editor.connect("cbs", "cdc")
    second = editor.connect("cbs", "cdc")

    assert first.id != second.id
    assert first.id.startswith("edge_")
    assert len([e for e in editor.graph.edges if (e.source, e.target) == ("cbs", "cdc")]) == 3


def test_reconnect_move_resize(editor):
    editor.toggle_edit_mode()
    editor.reconnect("e5", "cbs", "ui")
    editor.move_node("ui", 10, 20)
    editor.resize_node("ui", 640, 160)

    edge = editor.graph.find_edge("e5")
    node = editor.graph.find_node("ui")
    assert (edge.source, edge.target) == ("cbs", "ui")
    assert (node.position.x, node.position.y) == (10, 20)
    assert (node.size.width, node.size.height) == (640, 160)


def test_save_persists_without_transient_fields(tmp_path, editor, view_store):
    editor.toggle_edit_mode()
    editor.select_node("cbs")
    editor.update_node_field("label", "Core Banking")
    editor.save()

    assert editor.is_dirty is False
    document = json.loads((tmp_path / "architecture.json").read_text(encoding="utf-8"))
    assert all("isEditMode" not in n["data"] for n in document["nodes"])
    assert view_store.load("root").find_node("cbs").data.label == "Core Banking"


def test_save_failure_keeps_local_changes(editor):
    class BrokenStore:
        def load(self, view_id):
            return Graph.empty()

        def save(self, view_id, graph):
            raise StorageWriteError()

    editor.toggle_edit_mode()
    editor.add_node()
    editor.store = BrokenStore()

    with pytest.raises(StorageWriteError):
        editor.save()
    assert editor.is_dirty
    assert len(editor.graph.nodes) == 25


def test_reset_to_saved_discards_edits(editor, view_store):
    editor.save()
    editor.toggle_edit_mode()
    editor.add_node()

    editor.reset_to_saved()

    assert len(editor.graph.nodes) == 24
    assert editor.is_dirty is False


def test_factory_reset_on_root(editor, view_store, small_graph):
    view_store.save("root", small_graph)
    editor.load()
    assert len(editor.graph.nodes) == 3

    editor.factory_reset()

    assert len(editor.graph.nodes) == 24
    assert editor.is_dirty
    # nothing persisted until save
    assert len(view_store.load("root").nodes) == 3


def test_factory_reset_refused_off_root(editor, view_store, small_graph):
    view_store.save("svc-1", small_graph)
    editor.enter_group("svc-1", "Service One")

    with pytest.raises(FactoryResetNotAllowed):
        editor.factory_reset()
    assert view_store.load("svc-1") == small_graph
    assert len(editor.graph.nodes) == 3


def test_drill_down_and_back(editor, view_store):
    view_store.save("eaip", Graph(nodes=[make_node("agent", "Agent")]))

    editor.graph.find_node("eaip").data.on_enter()

    assert editor.current_view_id == "eaip"
    assert [b.name for b in editor.breadcrumbs] == ["Root", "Era AI Intelligence Platform (EAIP)"]
    assert editor.graph.node_ids() == ["agent"]

    editor.enter_group("agent", "Agent")
    assert editor.graph.nodes == []
    assert len(editor.breadcrumbs) == 3

    editor.navigate_to(0)
    assert editor.is_root_view
    assert len(editor.graph.nodes) == 24


def test_exit_group_at_root_is_a_noop(editor):
    graph = editor.graph
    assert editor.exit_group() is graph
    assert len(editor.breadcrumbs) == 1


def test_navigation_discards_unsaved_edits(editor, view_store, caplog):
    editor.save()
    editor.toggle_edit_mode()
    editor.add_node()

    editor.enter_group("ui", "User Interfaces")
    editor.exit_group()

    assert "unsaved changes" in caplog.text
    assert len(editor.graph.nodes) == 24
    assert editor.is_dirty is False


def test_sub_view_ids_are_sanitized_by_the_store(tmp_path, editor):
    editor.enter_group("../svc 1", "Weird")
    editor.save()

    assert not editor.is_root_view
    assert (tmp_path / "architecture_svc1.json").exists()
    assert not (tmp_path / "architecture.json").exists()


def test_fully_stripped_sub_view_never_addresses_root(tmp_path, editor, view_store):
    view_store.save("root", Graph(nodes=[make_node("r", "Root only")]))
    editor.load()

    editor.enter_group("!!!", "Punctuation")
    assert not editor.is_root_view
    assert editor.graph.nodes == []

    editor.toggle_edit_mode()
    with pytest.raises(FactoryResetNotAllowed):
        editor.factory_reset()
    editor.save()

    assert view_store.load("root").node_ids() == ["r"]


def test_unreadable_child_leaves_editor_on_parent(tmp_path, editor, view_store, small_graph):
    view_store.save("root", small_graph)
    editor.load()
    (tmp_path / "architecture_child.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(StorageReadError):
        editor.enter_group("child", "Child")

    assert editor.is_root_view
    assert len(editor.breadcrumbs) == 1
    editor.save()
    assert (tmp_path / "architecture_child.json").read_text(encoding="utf-8") == "{broken"
    assert view_store.load("root") == small_graph


def test_unreadable_parent_leaves_editor_on_child(tmp_path, editor, view_store):
    view_store.save("child", Graph(nodes=[make_node("c1", "Child node")]))
    editor.enter_group("child", "Child")
    (tmp_path / "architecture.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(StorageReadError):
        editor.exit_group()
    with pytest.raises(StorageReadError):
        editor.navigate_to(0)

    assert editor.current_view_id == "child"
    assert editor.graph.node_ids() == ["c1"]
    editor.save()
    assert (tmp_path / "architecture.json").read_text(encoding="utf-8") == "{broken"


def test_navigate_to_unknown_depth(editor):
    with pytest.raises(EditorError):
        editor.navigate_to(3)


def test_snapshot_clears_session_fields(editor):
    editor.toggle_edit_mode()
    snapshot = editor.snapshot()

    assert all(n.data.on_enter is None for n in snapshot.nodes)
    assert not any(n.data.is_edit_mode for n in snapshot.nodes)
    assert snapshot == editor.graph
