"""
In-memory solve session: running statistics and recent history.

A session is owned by its caller; nothing here is global.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..models import Solution
from .constants import HISTORY_LIMIT


@dataclass
class SessionEntry:
    """A single solved problem kept in the session history."""

    id: int
    problem: str
    solution: Solution
    timestamp: datetime = field(default_factory=datetime.now)


class SolveSession:
    """
    Tracks solved problems for one user session.

    Usage:
        session = SolveSession()
        session.record(solver.solve("2 + 2"))
        session.stats()
    """

    def __init__(self, limit: int = HISTORY_LIMIT):
        self.limit = limit
        self._history: List[SessionEntry] = []
        self._next_id = 1
        self.clear()

    def clear(self):
        """Forget all history and reset the statistics."""
        self._history = []
        self.solved = 0
        self.failed = 0
        self.average_solve_time = 0.0
        self.topic_counts: Counter = Counter()

    @property
    def total(self) -> int:
        return self.solved + self.failed

    def record(self, solution: Solution) -> SessionEntry:
        """
        Add a solution to the session.

        Updates the running average solve time and per-topic counts,
        and inserts the entry at the front of the history.
        """
        if solution.failed:
            self.failed += 1
        else:
            self.solved += 1

        n = self.total
        self.average_solve_time += (solution.solve_time_seconds - self.average_solve_time) / n

        if solution.topic is not None:
            self.topic_counts[solution.topic.value] += 1

        entry = SessionEntry(
            id=self._next_id,
            problem=solution.problem,
            solution=solution,
            timestamp=solution.timestamp,
        )
        self._next_id += 1

        self._history.insert(0, entry)
        del self._history[self.limit:]
        return entry

    def recent(self, limit: Optional[int] = None) -> List[SessionEntry]:
        """Newest-first history entries."""
        if limit is None:
            return list(self._history)
        return self._history[:limit]

    def recall(self, entry_id: int) -> Optional[SessionEntry]:
        for entry in self._history:
            if entry.id == entry_id:
                return entry
        return None

    def stats(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "solved": self.solved,
            "failed": self.failed,
            "average_solve_time": self.average_solve_time,
            "by_topic": dict(self.topic_counts),
        }
