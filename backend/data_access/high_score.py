"""
High-score persistence functions.

These functions delegate to the HighScoreRepository for actual database
operations and make sure the schema exists first. They raise on I/O
failure; callers that treat persistence as best-effort catch the error.
"""

import database
from .repositories import HighScoreRepository

# Repository instance
_high_score_repo = HighScoreRepository()


def load_high_score() -> int:
    """
    Read the persisted best score.

    Returns:
        The stored score, or 0 if none has been stored.
    """
    database.init_database()
    return _high_score_repo.get()


def store_high_score(score: int) -> None:
    """
    Persist `score` as the best score. Never lowers an existing value.

    Args:
        score: non-negative final or running score
    """
    if score < 0:
        raise ValueError(f"High score cannot be negative: {score}")
    database.init_database()
    _high_score_repo.save_if_higher(int(score))
