"""
Keyboard key names to directions, for hosts that read raw key events.
"""

from typing import Dict, Tuple

from domain.constants import DOWN, LEFT, RIGHT, UP, opposite

KEY_DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}


def direction_from_key(key: str, current: Tuple[int, int]) -> Tuple[int, int]:
    """Map a key to a direction; unknown keys and 180° turns keep `current`."""
    wanted = KEY_DIRECTIONS.get(key)
    if wanted is None:
        wanted = KEY_DIRECTIONS.get(key.lower()) if len(key) == 1 else None
    if wanted is None or wanted == opposite(current):
        return current
    return wanted
