"""
Domain entities for the toroidal snake engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, LLM calls, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_NAMES,
    SPEED, POINTS, POWER_UP_KINDS,
    opposite, parse_direction,
)
from .exceptions import PlacementExhausted, InvalidDirection
from .snake import Snake
from .power_up import PowerUp
from .game_state import GameState
from .snapshot import BoardSnapshot

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_NAMES',
    'SPEED', 'POINTS', 'POWER_UP_KINDS',
    'opposite', 'parse_direction',
    'PlacementExhausted', 'InvalidDirection',
    'Snake',
    'PowerUp',
    'GameState',
    'BoardSnapshot',
]
