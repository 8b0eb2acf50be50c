"""
High-score repository for the single persisted best score.
"""

from .base import BaseRepository

_ROW_ID = 1


class HighScoreRepository(BaseRepository):
    """
    Repository for high_scores table operations.

    The table holds at most one row (id = 1).
    """

    def get(self) -> int:
        """Return the stored best score, or 0 when nothing has been stored yet."""
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT score FROM high_scores WHERE id = ?", (_ROW_ID,))
            row = cursor.fetchone()
            return int(row["score"]) if row else 0

    def save_if_higher(self, score: int) -> bool:
        """
        Store `score` unless the stored value is already at least as high.

        Returns:
            True if the stored value changed.
        """
        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO high_scores (id, score, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    score = excluded.score,
                    updated_at = excluded.updated_at
                WHERE excluded.score > high_scores.score
                """,
                (_ROW_ID, score),
            )
            return cursor.rowcount > 0

    def clear(self) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute("DELETE FROM high_scores")
