from dataclasses import dataclass, field
from typing import Any, Dict, List


SECTIONS = ["General Banking", "Credit", "Trade", "Remittance"]

HARD_LOGIC = "Hard Logic"
AI_AGENTS = "AI Agents"
AI_RAG = "AI-RAG"
RULE_TYPES = [HARD_LOGIC, AI_AGENTS, AI_RAG]


@dataclass
class Rule:
    id: str
    title: str
    description: str
    indicators: List[str] = field(default_factory=list)
    section: str = ""                       # General Banking, Credit, Trade, Remittance
    type: str = ""                          # Hard Logic, AI Agents, AI-RAG
    risk: str = "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "indicators": list(self.indicators),
            "section": self.section,
            "type": self.type,
            "risk": self.risk,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Rule":
        return cls(
            id=raw["id"],
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            indicators=[str(i) for i in raw.get("indicators") or [] if i is not None],
            section=raw.get("section") or "",
            type=raw.get("type") or "",
            risk=raw.get("risk") or "Unknown",
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, description, id and indicators."""
        term = term.lower()
        return (
            term in self.title.lower()
            or term in self.description.lower()
            or term in self.id.lower()
            or any(term in indicator.lower() for indicator in self.indicators)
        )


RISK_LEVELS = ["high", "medium", "low"]


def risk_level(risk: str) -> str:
    """Bucket a free-text risk ("High", "Low-Med", ...) for badge colouring."""
    r = (risk or "").lower()
    if "high" in r:
        return "high"
    if "med" in r:
        return "medium"
    return "low"
