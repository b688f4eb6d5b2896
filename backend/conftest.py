"""Shared fixtures for the ruleboard tests."""

import pytest

from ruleboard.diagram.schema import (
    Edge,
    Graph,
    Node,
    NodeData,
    NodeKind,
    Position,
)
from ruleboard.store.views import ViewStore


def make_node(id: str, label: str, kind: NodeKind = NodeKind.LEAF, x: float = 0, y: float = 0) -> Node:
    return Node(id=id, kind=kind, position=Position(x, y), data=NodeData(label=label))


def make_edge(id: str, source: str, target: str) -> Edge:
    return Edge(id=id, source=source, target=target)


@pytest.fixture
def view_store(tmp_path):
    return ViewStore(tmp_path)


@pytest.fixture
def small_graph():
    return Graph(
        nodes=[
            make_node("a", "Gateway", x=10, y=20),
            make_node("b", "Orders"),
            make_node("c", "Orders DB"),
        ],
        edges=[
            make_edge("e1", "a", "b"),
            make_edge("e2", "b", "c"),
            make_edge("e3", "a", "c"),
        ],
    )
