from ruleboard.timeline.models import STATUSES, TimelinePhase
from ruleboard.timeline.service import Timeline

__all__ = ["STATUSES", "TimelinePhase", "Timeline"]
