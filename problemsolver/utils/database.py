"""
SQLite database for solve history.

Stores solved problems for later reference; only the newest
HISTORY_LIMIT entries are kept.
"""

import logging
import sqlite3
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass

from .constants import HISTORY_LIMIT
from .errors import HistoryError
from ..models import Solution
from ..output.formatter import format_answer

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    """A single entry in the solve history."""

    id: int
    timestamp: datetime
    problem: str
    topic: str
    answer: str
    explanation: str
    failed: bool
    solve_time_seconds: float


class HistoryDatabase:
    """
    SQLite database for storing solve history.

    Usage:
        db = HistoryDatabase()
        db.add_solution(solution)
        entries = db.get_recent(limit=10)
    """

    DEFAULT_PATH = Path.home() / ".problemsolver" / "history.db"

    def __init__(self, db_path: Optional[Path] = None, limit: int = HISTORY_LIMIT):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Uses default if None.
            limit: Number of newest entries to keep
        """
        self.db_path = Path(db_path) if db_path else self.DEFAULT_PATH
        self.limit = limit
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (OSError, sqlite3.Error) as e:
            raise HistoryError(
                "Could not open the history database.",
                technical_details=f"{self.db_path}: {e}",
            ) from e

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS solve_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    problem TEXT NOT NULL,
                    topic TEXT,
                    answer TEXT,
                    explanation TEXT,
                    failed INTEGER DEFAULT 0,
                    solve_time_seconds REAL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_topic
                ON solve_history(topic)
            """)
            conn.commit()

    def add_entry(
        self,
        problem: str,
        topic: str,
        answer: str,
        explanation: str = "",
        failed: bool = False,
        solve_time_seconds: float = 0.0,
        timestamp: Optional[datetime] = None,
    ) -> int:
        """
        Add a solve entry to history and prune old rows.

        Returns:
            ID of the new entry
        """
        timestamp = timestamp or datetime.now()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO solve_history
                (timestamp, problem, topic, answer, explanation, failed, solve_time_seconds)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    timestamp.isoformat(),
                    problem,
                    topic,
                    answer,
                    explanation,
                    int(failed),
                    solve_time_seconds,
                ),
            )
            entry_id = cursor.lastrowid
            pruned = conn.execute(
                """
                DELETE FROM solve_history
                WHERE id NOT IN (
                    SELECT id FROM solve_history ORDER BY id DESC LIMIT ?
                )
            """,
                (self.limit,),
            ).rowcount
            conn.commit()

        if pruned:
            logger.debug("Pruned %d old history entries", pruned)
        return entry_id

    def add_solution(self, solution: Solution) -> int:
        """Store a Solution. Returns the new entry ID."""
        return self.add_entry(
            problem=solution.problem,
            topic=solution.topic.value if solution.topic else "",
            answer=format_answer(solution.answer),
            explanation=solution.explanation,
            failed=solution.failed,
            solve_time_seconds=solution.solve_time_seconds,
            timestamp=solution.timestamp,
        )

    @staticmethod
    def _to_entry(row: sqlite3.Row) -> HistoryEntry:
        return HistoryEntry(
            id=row["id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            problem=row["problem"],
            topic=row["topic"] or "",
            answer=row["answer"] or "",
            explanation=row["explanation"] or "",
            failed=bool(row["failed"]),
            solve_time_seconds=row["solve_time_seconds"] or 0.0,
        )

    def get_recent(self, limit: int = 20) -> List[HistoryEntry]:
        """Get the most recent entries, newest first."""
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                """
                SELECT * FROM solve_history
                ORDER BY id DESC
                LIMIT ?
            """,
                (limit,),
            )
            return [self._to_entry(row) for row in cursor.fetchall()]

    def search(self, query: str, limit: int = 20) -> List[HistoryEntry]:
        """Search history by problem or answer text."""
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                """
                SELECT * FROM solve_history
                WHERE problem LIKE ? OR answer LIKE ?
                ORDER BY id DESC
                LIMIT ?
            """,
                (f"%{query}%", f"%{query}%", limit),
            )
            return [self._to_entry(row) for row in cursor.fetchall()]

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry by ID."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM solve_history WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0

    def clear_all(self) -> int:
        """Clear all history. Returns number of entries deleted."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM solve_history")
            conn.commit()
            return cursor.rowcount

    def get_stats(self) -> dict:
        """Get statistics about the history database."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM solve_history").fetchone()[0]
            failed = conn.execute(
                "SELECT COUNT(*) FROM solve_history WHERE failed = 1"
            ).fetchone()[0]

            avg_time = (
                conn.execute(
                    "SELECT AVG(solve_time_seconds) FROM solve_history"
                ).fetchone()[0]
                or 0
            )

            by_topic = conn.execute("""
                SELECT topic, COUNT(*) as count
                FROM solve_history
                GROUP BY topic
                ORDER BY count DESC
            """).fetchall()

            return {
                "total_entries": total,
                "failed_entries": failed,
                "average_solve_time_seconds": avg_time,
                "by_topic": dict(by_topic),
            }
