"""
Shared SQLite connection handling for repositories.

Every repository method opens its own short-lived connection; SQLite files
are cheap to open and the high-score table sees a handful of writes per game.
"""

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Tuple

import database

ConnectionPair = Tuple[sqlite3.Connection, sqlite3.Cursor]


class BaseRepository:
    """
    Base class for SQLite-backed repositories.

    Subclasses run their statements inside `self.connection()` (writes) or
    `self.read_connection()` (reads).
    """

    def _open(self) -> ConnectionPair:
        conn = database.get_connection()
        return conn, conn.cursor()

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Iterator[ConnectionPair]:
        """
        Yield (connection, cursor) for a write.

        The transaction commits when the block exits cleanly (unless
        auto_commit is False) and rolls back if it raises. The connection is
        closed either way.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("DELETE FROM high_scores")
        """
        conn, cursor = self._open()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Iterator[ConnectionPair]:
        """Yield (connection, cursor) for a read; nothing is committed."""
        conn, cursor = self._open()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
