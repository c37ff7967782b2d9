# restaurant_sim/history.py
from collections import deque
from typing import List, Optional

from .config import HISTORY_CAPACITY
from .models import HistoryEntry, SimulationState


class HistoryLog:
    """Bounded FIFO of daily state snapshots. Oldest entries are evicted first."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries = deque(maxlen=capacity)

    def append(self, state: SimulationState):
        entry = HistoryEntry(day=state.day, state=state.model_copy(deep=True))
        self._entries.append(entry)

    # Queries hand out copies; stored snapshots are never mutated after append
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[-1].model_copy(deep=True) if self._entries else None

    def all(self) -> List[HistoryEntry]:
        return [entry.model_copy(deep=True) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
