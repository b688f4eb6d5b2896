# Diagram data model
# Typed nodes and edges grouped into independently stored views

from ruleboard.diagram.schema import (
    ComponentType,
    Edge,
    EdgeKind,
    Graph,
    Node,
    NodeData,
    NodeKind,
    Position,
    Size,
)

__all__ = [
    "ComponentType",
    "Edge",
    "EdgeKind",
    "Graph",
    "Node",
    "NodeData",
    "NodeKind",
    "Position",
    "Size",
]
