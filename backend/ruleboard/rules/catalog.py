# backend/ruleboard/rules/catalog.py
"""
Rules Catalog - the use case rule records and their derived views

The collection is always persisted whole: editing one rule rewrites the
entire document.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ruleboard.errors import RuleNotFound
from ruleboard.rules.models import AI_AGENTS, AI_RAG, HARD_LOGIC, RISK_LEVELS, SECTIONS, Rule, risk_level
from ruleboard.store.collections import CollectionStore

logger = logging.getLogger(__name__)

ALL = "All"


@dataclass
class TypeCounts:
    total: int = 0
    hard: int = 0
    ai_agents: int = 0
    ai_rag: int = 0

    def add(self, rule: Rule) -> None:
        self.total += 1
        if rule.type == HARD_LOGIC:
            self.hard += 1
        elif rule.type == AI_AGENTS:
            self.ai_agents += 1
        elif rule.type == AI_RAG:
            self.ai_rag += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "hard": self.hard,
            "aiAgents": self.ai_agents,
            "aiRag": self.ai_rag,
        }


@dataclass
class CatalogStats:
    sections: Dict[str, TypeCounts] = field(default_factory=dict)
    overall: TypeCounts = field(default_factory=TypeCounts)
    risks: Dict[str, int] = field(default_factory=dict)     # high, medium, low

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sectionCounts": {name: counts.to_dict() for name, counts in self.sections.items()},
            "riskCounts": dict(self.risks),
            **self.overall.to_dict(),
        }


def filter_rules(
    rules: List[Rule],
    search: Optional[str] = None,
    section: Optional[str] = None,
    rule_type: Optional[str] = None,
) -> List[Rule]:
    """AND of search term, exact section and exact type. None or "All" disables a filter."""
    term = (search or "").strip()

    def keep(rule: Rule) -> bool:
        if term and not rule.matches(term):
            return False
        if section and section != ALL and rule.section != section:
            return False
        if rule_type and rule_type != ALL and rule.type != rule_type:
            return False
        return True

    return [r for r in rules if keep(r)]


def compute_stats(rules: List[Rule]) -> CatalogStats:
    stats = CatalogStats(
        sections={name: TypeCounts() for name in SECTIONS},
        risks={level: 0 for level in RISK_LEVELS},
    )
    for rule in rules:
        stats.overall.add(rule)
        stats.risks[risk_level(rule.risk)] += 1
        if rule.section in stats.sections:
            stats.sections[rule.section].add(rule)
    return stats


class RulesCatalog:
    def __init__(self, store: CollectionStore[Rule]):
        self.store = store
        self.rules: List[Rule] = []

    def load_all(self) -> List[Rule]:
        self.rules = self.store.load()
        return self.rules

    def replace_all(self, rules: List[Rule]) -> None:
        self.store.save(rules)
        self.rules = list(rules)

    def get(self, rule_id: str) -> Rule:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        raise RuleNotFound(rule_id)

    def save_one(self, updated: Rule) -> List[Rule]:
        """Read-modify-write of the whole collection."""
        rules = self.store.load()
        index = next((i for i, r in enumerate(rules) if r.id == updated.id), None)
        if index is None:
            raise RuleNotFound(updated.id)

        rules[index] = updated
        self.store.save(rules)
        self.rules = rules
        logger.info("[Rules] Saved rule %s", updated.id)
        return rules

    def filter(
        self,
        search: Optional[str] = None,
        section: Optional[str] = None,
        rule_type: Optional[str] = None,
    ) -> List[Rule]:
        return filter_rules(self.rules, search=search, section=section, rule_type=rule_type)

    def stats(self) -> CatalogStats:
        return compute_stats(self.rules)
