from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


STATUSES = ["planned", "in-progress", "completed"]


@dataclass
class TimelinePhase:
    id: str
    title: str
    duration: str = ""
    dates: str = ""
    focus: str = ""
    deliverables: List[str] = field(default_factory=list)
    testing: str = ""
    notes: str = ""
    status: str = "planned"                 # planned, in-progress, completed
    milestone: Optional[str] = None
    holiday: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "title": self.title,
            "duration": self.duration,
            "dates": self.dates,
            "focus": self.focus,
            "deliverables": list(self.deliverables),
            "testing": self.testing,
            "notes": self.notes,
            "status": self.status,
        }
        if self.milestone is not None:
            out["milestone"] = self.milestone
        if self.holiday is not None:
            out["holiday"] = self.holiday
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TimelinePhase":
        return cls(
            id=raw["id"],
            title=raw.get("title", ""),
            duration=raw.get("duration", ""),
            dates=raw.get("dates", ""),
            focus=raw.get("focus", ""),
            deliverables=list(raw.get("deliverables") or []),
            testing=raw.get("testing", ""),
            notes=raw.get("notes", ""),
            status=raw.get("status", "planned"),
            milestone=raw.get("milestone"),
            holiday=raw.get("holiday"),
        )
