"""
Database configuration and schema management for the snake engine.

This module provides SQLite connection management with environment-aware
path selection and schema initialization. Only the best-score scalar is
persisted; everything else lives for one session.
"""

import logging
import os
import sqlite3
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the database path.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH when set
        - backend/snake.db otherwise
    """
    env_path = os.getenv('SNAKE_DB_PATH')
    if env_path:
        parent = Path(env_path).parent
        if str(parent):
            os.makedirs(parent, exist_ok=True)
        return env_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'snake.db')


def get_connection() -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database() -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    logger.debug("Initializing database at: %s", get_database_path())

    conn = get_connection()
    cursor = conn.cursor()

    try:
        # Single-row table: the best score ever reached on this machine
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS high_scores (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                score INTEGER NOT NULL DEFAULT 0,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    logger.info("Database ready at %s", get_database_path())
