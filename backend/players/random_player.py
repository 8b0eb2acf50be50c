"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import DIRECTION_NAMES, DIRECTIONS_BY_NAME, opposite
from domain.snapshot import BoardSnapshot
from engine.transition import step_head
from .base import Player


def safe_moves(snapshot: BoardSnapshot) -> List[str]:
    """
    Names of the moves that survive the next tick.

    A move is unsafe if it reverses the current direction, lands on an
    obstacle, or lands on a body cell that is still occupied after the move
    (the tail counts only when the move eats food).
    """
    current = DIRECTIONS_BY_NAME[snapshot.direction]
    obstacles = set(snapshot.obstacles)

    valid_moves: List[str] = []
    for vector, name in DIRECTION_NAMES.items():
        if vector == opposite(current):
            continue
        new_head = step_head(snapshot.head, vector, snapshot.size)
        blocking = snapshot.snake if new_head == snapshot.food else snapshot.snake[:-1]
        if new_head in obstacles or new_head in blocking:
            continue
        valid_moves.append(name)
    return valid_moves


class RandomPlayer(Player):
    """
    A random AI that picks a direction avoiding obstacles and self-collisions.
    """

    def __init__(self, name: str = "random", rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def get_move(self, snapshot: BoardSnapshot) -> str:
        valid_moves = safe_moves(snapshot)
        if valid_moves:
            return self.rng.choice(valid_moves)

        # If no safe moves, keep going (we'll die anyway)
        return snapshot.direction
