"""
GameState entity - the authoritative engine state between two ticks.
"""

from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_STEP_INTERVAL,
    INITIAL_DIRECTION,
    INITIAL_FOOD,
    INITIAL_SNAKE,
)
from .power_up import PowerUp
from .snake import Snake


class GameState:
    """
    Everything the transition engine reads and writes for one tick.

    Attributes:
        size: board bound; coordinates range over [-size, size] on both axes
        snake: the Snake entity, head first
        direction: committed direction as a unit vector
        food: (x, y) of the single food cell, None only after a failed respawn
        obstacles: permanent obstacle cells, in spawn order
        power_ups: active PowerUp entities
        score: non-negative score for this session
        level: starts at 1, +1 per 50 points crossed
        step_interval: seconds between ticks; only ever shrinks until reset
    """

    def __init__(
        self,
        size: int,
        snake: Snake,
        direction: Tuple[int, int],
        food: Optional[Tuple[int, int]],
        obstacles: Optional[List[Tuple[int, int]]] = None,
        power_ups: Optional[List[PowerUp]] = None,
        score: int = 0,
        level: int = 1,
        step_interval: float = DEFAULT_STEP_INTERVAL,
    ):
        self.size = size
        self.snake = snake
        self.direction = direction
        self.food = food
        self.obstacles = list(obstacles or [])
        self.power_ups = list(power_ups or [])
        self.score = score
        self.level = level
        self.step_interval = step_interval

    @classmethod
    def initial(cls, size: int = DEFAULT_BOARD_SIZE, step_interval: float = DEFAULT_STEP_INTERVAL) -> "GameState":
        """Build the fixed starting configuration: 3 segments at the origin heading right."""
        return cls(
            size=size,
            snake=Snake(INITIAL_SNAKE),
            direction=INITIAL_DIRECTION,
            food=INITIAL_FOOD,
            step_interval=step_interval,
        )

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return -self.size <= x <= self.size and -self.size <= y <= self.size

    def __repr__(self):
        return (
            f"<GameState head={self.snake.head}, length={len(self.snake)}, food={self.food}, "
            f"score={self.score}, level={self.level}, obstacles={len(self.obstacles)}, "
            f"power_ups={len(self.power_ups)}>"
        )
