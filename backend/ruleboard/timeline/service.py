import logging
from typing import List

from ruleboard.errors import PhaseNotFound
from ruleboard.store.collections import CollectionStore
from ruleboard.timeline.models import TimelinePhase

logger = logging.getLogger(__name__)


class Timeline:
    """Ordered project phases; list order is chronological and is what gets persisted."""

    def __init__(self, store: CollectionStore[TimelinePhase]):
        self.store = store

    def load(self) -> List[TimelinePhase]:
        return self.store.load()

    def save(self, phases: List[TimelinePhase]) -> None:
        self.store.save(phases)

    def move(self, phase_id: str, new_index: int) -> List[TimelinePhase]:
        """Move one phase to `new_index` (clamped to the list bounds) and persist the new order."""
        phases = self.store.load()
        index = next((i for i, p in enumerate(phases) if p.id == phase_id), None)
        if index is None:
            raise PhaseNotFound(phase_id)

        phase = phases.pop(index)
        new_index = max(0, min(new_index, len(phases)))
        phases.insert(new_index, phase)

        self.store.save(phases)
        logger.info("[Timeline] Moved %s from %d to %d", phase_id, index, new_index)
        return phases
