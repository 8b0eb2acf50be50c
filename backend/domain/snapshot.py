"""
BoardSnapshot - a read-only projection of a session for presentation.

Renderers, HTTP clients, players and replays all read this; nothing here
writes back into the engine.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import DIRECTION_NAMES


class BoardSnapshot:
    """
    A snapshot of the session at a specific point in time.

    Attributes:
        tick: number of ticks applied since the last reset
        size: board bound ([-size, size] on both axes)
        snake: list of (x, y), head first
        direction: committed direction name ('UP', 'DOWN', 'LEFT', 'RIGHT')
        food: (x, y) or None
        obstacles: list of (x, y)
        power_ups: list of dicts with position, kind and remaining lifetime
        score, level, high_score: progression counters
        step_interval: seconds between ticks
        status: 'idle', 'running', 'paused' or 'game_over'
        scoreboard: list of (identifier, score) in the order games ended
    """

    def __init__(
        self,
        tick: int,
        size: int,
        snake: List[Tuple[int, int]],
        direction: str,
        food: Optional[Tuple[int, int]],
        obstacles: List[Tuple[int, int]],
        power_ups: List[Dict[str, Any]],
        score: int,
        level: int,
        high_score: int,
        step_interval: float,
        status: str,
        scoreboard: List[Tuple[str, int]],
    ):
        self.tick = tick
        self.size = size
        self.snake = snake
        self.direction = direction
        self.food = food
        self.obstacles = obstacles
        self.power_ups = power_ups
        self.score = score
        self.level = level
        self.high_score = high_score
        self.step_interval = step_interval
        self.status = status
        self.scoreboard = scoreboard

    @classmethod
    def from_state(cls, state, tick: int, high_score: int, status: str, scoreboard) -> "BoardSnapshot":
        """Copy everything out of a GameState so later ticks cannot leak into the snapshot."""
        return cls(
            tick=tick,
            size=state.size,
            snake=list(state.snake.positions),
            direction=DIRECTION_NAMES[state.direction],
            food=state.food,
            obstacles=list(state.obstacles),
            power_ups=[pu.to_dict() for pu in state.power_ups],
            score=state.score,
            level=state.level,
            high_score=high_score,
            step_interval=state.step_interval,
            status=status,
            scoreboard=[(entry.identifier, entry.score) for entry in scoreboard],
        )

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    @property
    def game_over(self) -> bool:
        return self.status == "game_over"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "size": self.size,
            "snake": [list(p) for p in self.snake],
            "direction": self.direction,
            "food": list(self.food) if self.food is not None else None,
            "obstacles": [list(p) for p in self.obstacles],
            "power_ups": self.power_ups,
            "score": self.score,
            "level": self.level,
            "high_score": self.high_score,
            "step_interval": self.step_interval,
            "status": self.status,
            "scoreboard": [
                {"name": name, "score": score} for name, score in self.scoreboard
            ],
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        # = obstacle
        S = speed power-up, P = points power-up
        H = snake head, T = snake body
        Rows are printed top (y=size) to bottom (y=-size).
        """
        span = 2 * self.size + 1
        board = [['.' for _ in range(span)] for _ in range(span)]

        def put(cell, marker):
            x, y = cell
            board[y + self.size][x + self.size] = marker

        for pu in self.power_ups:
            put(tuple(pu["position"]), 'S' if pu["kind"] == "speed" else 'P')
        if self.food is not None:
            put(self.food, 'F')
        for cell in self.obstacles:
            put(cell, '#')
        for idx, cell in enumerate(self.snake):
            put(cell, 'H' if idx == 0 else 'T')

        result = []
        for y in range(self.size, -self.size - 1, -1):
            result.append(f"{y:3d} {' '.join(board[y + self.size])}")
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<BoardSnapshot tick={self.tick}, status={self.status}, "
            f"score={self.score}, level={self.level}>"
        )
