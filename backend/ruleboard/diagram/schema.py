from typing import Any, Callable, Dict, List, Optional, Set
from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    LEAF = "leaf"
    GROUP = "group"


class EdgeKind(Enum):
    DEFAULT = "default"
    STRAIGHT = "straight"
    STEP = "step"
    SMOOTHSTEP = "smoothstep"
    SIMPLEBEZIER = "simplebezier"


class ComponentType(Enum):
    SERVICE = "service"
    DATABASE = "database"
    INTERFACE = "interface"
    SECURITY = "security"
    INTEGRATION = "integration"


# Older documents stored the widget's node type names instead of the kind
LEGACY_NODE_KINDS = {
    "custom": NodeKind.LEAF,
    "customGroup": NodeKind.GROUP,
    "group": NodeKind.GROUP,
}


def parse_node_kind(value: Optional[str]) -> NodeKind:
    if value is None:
        return NodeKind.LEAF
    if value in LEGACY_NODE_KINDS:
        return LEGACY_NODE_KINDS[value]
    return NodeKind(value)


@dataclass
class Position:
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Position":
        return cls(x=raw.get("x", 0), y=raw.get("y", 0))


@dataclass
class Size:
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Size":
        return cls(width=raw["width"], height=raw["height"])


@dataclass
class NodeData:
    label: str = ""
    sub_label: Optional[str] = None
    icon: Optional[str] = None
    details: Optional[List[str]] = None
    notes: Optional[str] = None
    type: Optional[ComponentType] = None      # service, database, interface, security, integration
    color: Optional[str] = None
    variant: Optional[str] = None

    # Session-only state, never written to the store
    is_edit_mode: bool = field(default=False, compare=False)
    on_enter: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)

    # wire key -> attribute
    FIELDS = {
        "label": "label",
        "subLabel": "sub_label",
        "icon": "icon",
        "details": "details",
        "notes": "notes",
        "type": "type",
        "color": "color",
        "variant": "variant",
    }

    def set_field(self, key: str, value: Any) -> None:
        """Set one field by wire key ("subLabel") or attribute name ("sub_label")."""
        attr = self.FIELDS.get(key, key)
        if attr not in self.FIELDS.values():
            raise KeyError(key)
        if attr == "type" and value is not None and not isinstance(value, ComponentType):
            value = ComponentType(value)
        setattr(self, attr, value)

    def to_dict(self, include_transient: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, attr in self.FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            out[key] = value
        if include_transient:
            out["isEditMode"] = self.is_edit_mode
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "NodeData":
        data = cls(label=raw.get("label", ""))
        for key, attr in cls.FIELDS.items():
            if key == "label" or raw.get(key) is None:
                continue
            data.set_field(attr, raw[key])
        if data.details is not None:
            data.details = list(data.details)
        return data


@dataclass
class Node:
    id: str
    kind: NodeKind
    position: Position
    data: NodeData = field(default_factory=NodeData)
    size: Optional[Size] = None
    parent_node: Optional[str] = None         # enclosing group in the same view
    extent: Optional[str] = None
    style: Optional[Dict[str, Any]] = None    # render hints, passed to the widget as-is

    @property
    def is_group(self) -> bool:
        return self.kind == NodeKind.GROUP

    def to_dict(self, include_transient: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value,
            "position": self.position.to_dict(),
        }
        if self.size is not None:
            out["size"] = self.size.to_dict()
        if self.parent_node is not None:
            out["parentNode"] = self.parent_node
        if self.extent is not None:
            out["extent"] = self.extent
        if self.style is not None:
            out["style"] = dict(self.style)
        out["data"] = self.data.to_dict(include_transient=include_transient)
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Node":
        size = raw.get("size")
        return cls(
            id=raw["id"],
            kind=parse_node_kind(raw.get("kind", raw.get("type"))),
            position=Position.from_dict(raw.get("position") or {}),
            data=NodeData.from_dict(raw.get("data") or {}),
            size=Size.from_dict(size) if size else None,
            parent_node=raw.get("parentNode"),
            extent=raw.get("extent"),
            style=dict(raw["style"]) if raw.get("style") is not None else None,
        )


@dataclass
class Edge:
    id: str
    source: str
    target: str
    kind: EdgeKind = EdgeKind.DEFAULT
    label: Optional[str] = None
    animated: bool = False
    style: Optional[Dict[str, Any]] = None

    FIELDS = {
        "source": "source",
        "target": "target",
        "kind": "kind",
        "type": "kind",
        "label": "label",
        "animated": "animated",
        "style": "style",
    }

    def set_field(self, key: str, value: Any) -> None:
        attr = self.FIELDS.get(key)
        if attr is None:
            raise KeyError(key)
        if attr == "kind" and not isinstance(value, EdgeKind):
            value = EdgeKind(value)
        if attr == "animated":
            value = bool(value)
        setattr(self, attr, value)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "animated": self.animated,
        }
        if self.label is not None:
            out["label"] = self.label
        if self.style is not None:
            out["style"] = dict(self.style)
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Edge":
        return cls(
            id=raw["id"],
            source=raw["source"],
            target=raw["target"],
            kind=EdgeKind(raw.get("kind", raw.get("type")) or "default"),
            label=raw.get("label"),
            animated=bool(raw.get("animated", False)),
            style=dict(raw["style"]) if raw.get("style") is not None else None,
        )


@dataclass
class Graph:
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Graph":
        return cls(nodes=[], edges=[])

    def find_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def find_edge(self, edge_id: str) -> Optional[Edge]:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def edge_ids(self) -> List[str]:
        return [e.id for e in self.edges]

    def to_dict(self, include_transient: bool = False) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict(include_transient=include_transient) for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Graph":
        if not isinstance(raw, dict):
            raise ValueError("graph document must be a JSON object")

        raw_edges = raw.get("edges") or []
        taken = {e["id"] for e in raw_edges if isinstance(e, dict) and e.get("id")}
        edges = []
        for e in raw_edges:
            if isinstance(e, dict) and not e.get("id"):
                # Hand-written documents may omit edge ids
                e = {**e, "id": _unique_edge_id(e, taken)}
                taken.add(e["id"])
            edges.append(Edge.from_dict(e))

        return cls(
            nodes=[Node.from_dict(n) for n in raw.get("nodes") or []],
            edges=edges,
        )


def _unique_edge_id(raw: Dict[str, Any], taken: Set[str]) -> str:
    base = f"e-{raw.get('source')}-{raw.get('target')}"
    candidate = base
    n = 1
    while candidate in taken:
        n += 1
        candidate = f"{base}-{n}"
    return candidate
