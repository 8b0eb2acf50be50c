"""
Simulation engine: placement, the per-tick transition and the session controller.
"""

from .placement import place_random
from .transition import Continue, Terminated, TickResult, tick, wrap, step_head, resolve_direction
from .session import (
    SessionController,
    ScoreboardEntry,
    IDLE,
    RUNNING,
    PAUSED,
    GAME_OVER,
)

__all__ = [
    'place_random',
    'Continue',
    'Terminated',
    'TickResult',
    'tick',
    'wrap',
    'step_head',
    'resolve_direction',
    'SessionController',
    'ScoreboardEntry',
    'IDLE',
    'RUNNING',
    'PAUSED',
    'GAME_OVER',
]
