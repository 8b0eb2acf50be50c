"""
Game constants for the toroidal snake engine.
"""

from typing import Dict, Tuple

from .exceptions import InvalidDirection

# Movement directions as unit vectors (y grows upward)
UP = (0, 1)
DOWN = (0, -1)
LEFT = (-1, 0)
RIGHT = (1, 0)
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_NAMES: Dict[Tuple[int, int], str] = {
    UP: "UP",
    DOWN: "DOWN",
    LEFT: "LEFT",
    RIGHT: "RIGHT",
}
DIRECTIONS_BY_NAME: Dict[str, Tuple[int, int]] = {
    name: vector for vector, name in DIRECTION_NAMES.items()
}
_ALIASES = {"U": "UP", "D": "DOWN", "L": "LEFT", "R": "RIGHT"}

# Power-up kinds
SPEED = "speed"
POINTS = "points"
POWER_UP_KINDS = (SPEED, POINTS)

# Scoring and progression
FOOD_POINTS = 10
POWER_UP_POINTS = 50
LEVEL_SCORE_STEP = 50
POWER_UP_SPAWN_CHANCE = 0.2
POWER_UP_LIFETIME = 5.0
SPEED_FACTOR = 0.85

# Board and pacing defaults
DEFAULT_BOARD_SIZE = 20
DEFAULT_STEP_INTERVAL = 0.2
MIN_STEP_INTERVAL = 0.02
MAX_PLACEMENT_ATTEMPTS = 1000

# Initial configuration restored on every reset
INITIAL_SNAKE = ((0, 0), (-1, 0), (-2, 0))
INITIAL_DIRECTION = RIGHT
INITIAL_FOOD = (3, 0)

DEFAULT_IDENTIFIER = "AAA"


def opposite(direction: Tuple[int, int]) -> Tuple[int, int]:
    """Return the exact reverse of a direction vector."""
    return (-direction[0], -direction[1])


def parse_direction(value) -> Tuple[int, int]:
    """
    Normalize a direction given as a vector or a name.

    Accepts the four unit vectors, the names UP/DOWN/LEFT/RIGHT in any case,
    and the one-letter aliases U/D/L/R.

    Raises:
        InvalidDirection: if the value is not one of the four cardinal directions.
    """
    if isinstance(value, str):
        name = value.strip().upper()
        name = _ALIASES.get(name, name)
        if name in DIRECTIONS_BY_NAME:
            return DIRECTIONS_BY_NAME[name]
        raise InvalidDirection(value)

    if not isinstance(value, (tuple, list)) or len(value) != 2:
        raise InvalidDirection(value)
    # Components must be real ints; bools, floats and digit strings are rejected
    if any(type(v) is not int for v in value):
        raise InvalidDirection(value)
    vector = (value[0], value[1])
    if vector not in VALID_MOVES:
        raise InvalidDirection(value)
    return vector
