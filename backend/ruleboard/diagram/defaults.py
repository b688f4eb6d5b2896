# backend/ruleboard/diagram/defaults.py
"""
Factory default for the root system diagram.

Used when the root view has never been saved and by the editor's
"reset to default" action.
"""

import copy
from typing import List, Optional

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


DASHED = {"strokeDasharray": "5,5"}


def _leaf(
    id: str,
    x: float,
    y: float,
    label: str,
    icon: str,
    type: ComponentType,
    sub_label: Optional[str] = None,
    details: Optional[List[str]] = None,
    parent: Optional[str] = None,
) -> Node:
    return Node(
        id=id,
        kind=NodeKind.LEAF,
        position=Position(x, y),
        parent_node=parent,
        extent="parent" if parent else None,
        data=NodeData(label=label, sub_label=sub_label, icon=icon, type=type, details=details),
    )


def _group(id: str, x: float, y: float, width: float, height: float, label: str, style: dict) -> Node:
    return Node(
        id=id,
        kind=NodeKind.GROUP,
        position=Position(x, y),
        size=Size(width, height),
        style=style,
        data=NodeData(label=label),
    )


# ============================================================
# NODES
# ============================================================

DEFAULT_NODES: List[Node] = [
    # Sources
    _leaf(
        "cbs", 250, 0, "Core Banking Systems", "Database", ComponentType.DATABASE,
        sub_label="CBS / Trade Systems (Oracle / Postgres)",
        details=[
            "Source of Truth for financial data",
            "Handles high-volume transactions",
            "Legacy systems integration",
        ],
    ),
    _leaf(
        "ums", 800, 0, "UMS / Security", "Shield", ComponentType.SECURITY,
        sub_label="Keycloak (RBAC / SSO)",
        details=[
            "Centralized Identity Management",
            "Role-Based Access Control",
            "Single Sign-On (SSO)",
        ],
    ),
    _leaf(
        "cdc", 250, 150, "Change Data Capture", "RefreshCw", ComponentType.INTEGRATION,
        sub_label="Debezium CDC + NiFi",
        details=[
            "Real-time database log mining",
            "Zero-impact on source DB",
            "Apache NiFi for transformation",
        ],
    ),
    _leaf(
        "app-platform", 800, 150, "Application Platform", "Server", ComponentType.SERVICE,
        sub_label="Spring Boot Gateway (API / BFF)",
        details=[
            "API Gateway Pattern",
            "Backend for Frontend (BFF)",
            "Request Routing & Rate Limiting",
        ],
    ),
    _leaf(
        "kafka", 250, 300, "Event Backbone", "Activity", ComponentType.INTEGRATION,
        sub_label="Apache Kafka",
        details=[
            "High-throughput event streaming",
            "Decoupled architecture",
            "Message persistence",
        ],
    ),

    # User interfaces
    _group(
        "ui", 600, 300, 500, 120, "User Interfaces",
        {"border": "1px dashed #cbd5e1", "borderRadius": "8px", "padding": "10px"},
    ),
    _leaf("ui-superset", 20, 40, "Superset / Grafana", "BarChart", ComponentType.INTERFACE, parent="ui"),
    _leaf("ui-bpm", 180, 40, "Business Process Mgmt", "ClipboardList", ComponentType.INTERFACE, parent="ui"),
    _leaf("ui-ai", 340, 40, "AI Assistant/Agent", "Bot", ComponentType.INTERFACE, parent="ui"),

    _leaf(
        "doris", 500, 500, "Analytical Datamart", "Database", ComponentType.DATABASE,
        sub_label="Apache Doris (HSAP Tables)",
        details=[
            "Real-time Analytics",
            "High-speed Ad-hoc Queries",
            "Unified Data Storage",
        ],
    ),

    # Search & logs (optional)
    _group(
        "search", 0, 600, 200, 200, "Optional Search & Logs",
        {"border": "1px dashed #cbd5e1", "borderRadius": "8px"},
    ),
    _leaf("elasticsearch", 20, 40, "Elasticsearch Cluster", "Search", ComponentType.DATABASE, parent="search"),
    _leaf("kibana", 20, 120, "Kibana Access", "Monitor", ComponentType.INTERFACE, parent="search"),

    # AI platform
    _group(
        "eaip", 250, 650, 450, 250, "Era AI Intelligence Platform (EAIP)",
        {
            "border": "2px solid #6366f1",
            "borderRadius": "12px",
            "backgroundColor": "rgba(99, 102, 241, 0.05)",
        },
    ),
    _leaf("eaip-orch", 20, 50, "Agent Orchestrator", "Cpu", ComponentType.SERVICE,
          sub_label="Multi-Hop Logic", parent="eaip"),
    _leaf("eaip-langgraph", 240, 50, "LangGraph Agents", "Network", ComponentType.SERVICE,
          sub_label="+ Tool Gateway", parent="eaip"),
    _leaf("eaip-rag", 20, 150, "RAG Engine", "BookOpen", ComponentType.SERVICE,
          sub_label="Evidence & Narrative", parent="eaip"),
    _leaf("eaip-ml", 240, 150, "ML Models", "Brain", ComponentType.SERVICE,
          sub_label="XGBoost / PyTorch", parent="eaip"),

    # Real-time monitoring
    _group(
        "rms", 750, 650, 400, 150, "RMS - Real-Time Monitoring",
        {"border": "1px dashed #cbd5e1", "borderRadius": "8px"},
    ),
    _leaf("rms-kogito", 20, 50, "Kogito Rules Engine", "Settings", ComponentType.SERVICE, parent="rms"),
    _leaf("rms-ml", 200, 50, "Real-Time ML Scoring", "Zap", ComponentType.SERVICE, parent="rms"),

    # Downstream
    _leaf("case-mgmt", 750, 850, "Case Management", "Briefcase", ComponentType.SERVICE,
          sub_label="Flowable BPM"),
    _leaf("reg-reporting", 750, 980, "Regulatory Reporting", "FileText", ComponentType.SERVICE,
          sub_label="STR Export Service"),
    _leaf(
        "central-engine", 1200, 650, "Central Analytical Engine", "Globe", ComponentType.SERVICE,
        sub_label="Hybrid Search (HSAP)",
        details=[
            "Real-time + Historical analytics",
            "Handles 95% of workloads",
            "Kibana log exploration",
        ],
    ),
]


# ============================================================
# EDGES
# ============================================================

DEFAULT_EDGES: List[Edge] = [
    Edge(id="e1", source="cbs", target="cdc", animated=True),
    Edge(id="e2", source="cdc", target="kafka", animated=True),
    Edge(id="e3", source="kafka", target="doris", animated=True),
    Edge(id="e4", source="kafka", target="search", kind=EdgeKind.SMOOTHSTEP, style=DASHED),
    Edge(id="e5", source="ums", target="app-platform"),
    Edge(id="e6", source="app-platform", target="ui"),
    Edge(id="e7", source="ui", target="doris", animated=True),
    Edge(id="e8", source="doris", target="eaip", animated=True),
    Edge(id="e9", source="doris", target="rms", animated=True),
    Edge(id="e10", source="rms", target="case-mgmt"),
    Edge(id="e11", source="case-mgmt", target="reg-reporting"),
    Edge(id="e12", source="eaip", target="case-mgmt"),
    Edge(id="e13", source="doris", target="central-engine", style=DASHED),
]


def default_root_graph() -> Graph:
    """Fresh copy of the built-in root diagram; callers may mutate it freely."""
    return Graph(nodes=copy.deepcopy(DEFAULT_NODES), edges=copy.deepcopy(DEFAULT_EDGES))
