# backend/ruleboard/timeline/defaults.py
"""
Built-in seed for the project timeline: a seven month iterative plan ending
with full rule coverage in July 2026. Array order is chronological order.
"""

import copy
from typing import List

from ruleboard.timeline.models import TimelinePhase


DEFAULT_PHASES: List[TimelinePhase] = [
    TimelinePhase(
        id="phase-1",
        title="Foundation & Data Ingestion",
        duration="4 weeks",
        dates="Jan 2026",
        focus="CDC pipelines from core banking into the event backbone",
        deliverables=[
            "Debezium connectors for CBS and trade systems",
            "Kafka topics and schema registry",
            "Keycloak realm with RBAC roles",
        ],
        testing="Replay of one month of historical transactions",
        notes="Source system access depends on bank IT change windows.",
        status="completed",
    ),
    TimelinePhase(
        id="phase-2",
        title="Analytical Datamart",
        duration="4 weeks",
        dates="Feb 2026",
        focus="Doris HSAP tables and first dashboards",
        deliverables=[
            "Customer, account and transaction marts",
            "Superset dashboards for branch operations",
        ],
        testing="Query latency benchmarks on production-sized data",
        notes="",
        status="in-progress",
        milestone="MVP: Hard Logic rules live for General Banking",
    ),
    TimelinePhase(
        id="phase-3",
        title="Hard Logic Rules Rollout",
        duration="6 weeks",
        dates="Mar - Apr 2026",
        focus="Kogito rules engine with real-time scoring for all sections",
        deliverables=[
            "Hard Logic rules for Credit, Trade and Remittance",
            "Alert routing into case management",
        ],
        testing="Parallel run against the legacy monitoring system",
        notes="Alert thresholds tuned with the compliance team.",
        status="planned",
        holiday="Eid ul-Fitr",
    ),
    TimelinePhase(
        id="phase-4",
        title="AI Agents & RAG",
        duration="8 weeks",
        dates="May - Jun 2026",
        focus="Agent orchestrator, RAG evidence engine and ML models",
        deliverables=[
            "LangGraph agents for narrative rules",
            "RAG engine over KYC and trade documents",
            "XGBoost risk scoring models",
        ],
        testing="Analyst review of sampled agent findings",
        notes="",
        status="planned",
    ),
    TimelinePhase(
        id="phase-5",
        title="Regulatory Reporting & Go-Live",
        duration="4 weeks",
        dates="Jul 2026",
        focus="STR export, hardening and handover",
        deliverables=[
            "STR export service",
            "Operational runbooks",
        ],
        testing="User acceptance testing with the compliance unit",
        notes="",
        status="planned",
        milestone="Full coverage of all rule sections",
    ),
]


def default_phases() -> List[TimelinePhase]:
    return copy.deepcopy(DEFAULT_PHASES)
