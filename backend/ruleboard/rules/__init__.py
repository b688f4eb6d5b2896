# Rules catalog: compliance use case records, filtering and statistics

from ruleboard.rules.models import RISK_LEVELS, RULE_TYPES, SECTIONS, Rule, risk_level
from ruleboard.rules.catalog import CatalogStats, RulesCatalog, compute_stats, filter_rules

__all__ = [
    "RISK_LEVELS",
    "RULE_TYPES",
    "SECTIONS",
    "Rule",
    "risk_level",
    "CatalogStats",
    "RulesCatalog",
    "compute_stats",
    "filter_rules",
]
