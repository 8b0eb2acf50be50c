"""
Data access layer for the snake engine.

This module provides the persistence interface consumed by the session
controller: a single best-score scalar stored in SQLite.
"""

from .high_score import load_high_score, store_high_score

__all__ = [
    'load_high_score',
    'store_high_score',
]
