"""
Transition engine: one pure state transition per tick.

`tick` never mutates its input and never raises. It returns either
`Continue(new_state)` or `Terminated(final_score)`; the session controller
performs every side effect (persistence, scoreboard) after the fact.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple, Union

from domain.constants import (
    FOOD_POINTS,
    LEVEL_SCORE_STEP,
    MIN_STEP_INTERVAL,
    POINTS,
    POWER_UP_KINDS,
    POWER_UP_LIFETIME,
    POWER_UP_POINTS,
    POWER_UP_SPAWN_CHANCE,
    SPEED_FACTOR,
    opposite,
    parse_direction,
)
from domain.exceptions import InvalidDirection, PlacementExhausted
from domain.game_state import GameState
from domain.power_up import PowerUp
from domain.snake import Snake
from .placement import place_random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continue:
    state: GameState


@dataclass(frozen=True)
class Terminated:
    final_score: int
    reason: str  # 'self' or 'obstacle'


TickResult = Union[Continue, Terminated]


def wrap(value: int, size: int) -> int:
    """Wrap one coordinate onto [-size, size]; past +size lands on -size and vice versa."""
    span = 2 * size + 1
    return (value + size) % span - size


def step_head(head: Tuple[int, int], direction: Tuple[int, int], size: int) -> Tuple[int, int]:
    return (wrap(head[0] + direction[0], size), wrap(head[1] + direction[1], size))


def resolve_direction(current: Tuple[int, int], intent) -> Tuple[int, int]:
    """
    Pick the direction to move in this tick.

    The intent wins unless it is missing, invalid, or the exact reverse of
    the committed direction.
    """
    if intent is None:
        return current
    try:
        wanted = parse_direction(intent)
    except InvalidDirection:
        logger.debug("Ignoring invalid intent %r", intent)
        return current
    if wanted == opposite(current):
        return current
    return wanted


def _try_place(
    size: int,
    excluded: Set[Tuple[int, int]],
    rng,
    what: str,
) -> Optional[Tuple[int, int]]:
    try:
        cell = place_random(size, excluded, rng)
    except PlacementExhausted as exc:
        logger.warning("Skipping %s spawn: %s", what, exc)
        return None
    logger.debug("Spawned %s at %s", what, cell)
    return cell


def _occupied(*groups: Iterable[Tuple[int, int]]) -> Set[Tuple[int, int]]:
    cells: Set[Tuple[int, int]] = set()
    for group in groups:
        cells.update(group)
    return cells


def tick(
    state: GameState,
    intent=None,
    rng=None,
    elapsed: float = 0.0,
    min_step_interval: float = MIN_STEP_INTERVAL,
    power_up_lifetime: float = POWER_UP_LIFETIME,
) -> TickResult:
    """
    Advance the game by one cell.

    Args:
        state: current engine state (left untouched)
        intent: latest requested direction, as a vector or a name
        rng: random source for spawns; the module-level generator when omitted
        elapsed: real seconds since the previous tick, used to age power-ups
        min_step_interval: floor applied when a speed power-up shortens the interval
        power_up_lifetime: lifetime given to power-ups spawned this tick

    Returns:
        Continue(new_state), or Terminated(score before this tick) on collision.
    """
    rng = rng or random
    size = state.size

    # Direction and wrapped head
    direction = resolve_direction(state.direction, intent)
    head = step_head(state.snake.head, direction, size)

    # Collisions; the tail only blocks when it stays put this tick
    grows = head == state.food
    body = list(state.snake.positions)
    blocking = body if grows else body[:-1]
    if head in blocking:
        return Terminated(final_score=state.score, reason="self")
    if head in state.obstacles:
        return Terminated(final_score=state.score, reason="obstacle")

    # Move, eat, spawn
    positions = deque(body)
    positions.appendleft(head)
    if not grows:
        positions.pop()
    snake = Snake(positions)

    score = state.score
    food = state.food
    obstacles: List[Tuple[int, int]] = list(state.obstacles)
    spawned: List[PowerUp] = []

    if grows:
        score += FOOD_POINTS
        food = _try_place(size, _occupied(snake, obstacles), rng, "food")
        if rng.random() < POWER_UP_SPAWN_CHANCE:
            kind = rng.choice(POWER_UP_KINDS)
            cell = _try_place(size, _occupied(snake, obstacles), rng, f"{kind} power-up")
            if cell is not None:
                spawned.append(PowerUp(cell, kind, power_up_lifetime))

    # Consume power-ups under the head, age the rest
    step_interval = state.step_interval
    floor = min(min_step_interval, step_interval)
    survivors: List[PowerUp] = []
    for pu in state.power_ups:
        if pu.position == head:
            if pu.kind == POINTS:
                score += POWER_UP_POINTS
            else:
                step_interval = max(step_interval * SPEED_FACTOR, floor)
            logger.debug("Consumed %s power-up at %s", pu.kind, head)
            continue
        aged = pu.tick_down(elapsed)
        if aged.expired:
            logger.debug("Power-up %s at %s expired", aged.kind, aged.position)
            continue
        survivors.append(aged)
    power_ups = survivors + spawned

    # Leveling: one level and one obstacle per multiple of 50 crossed
    level = state.level
    crossed = score // LEVEL_SCORE_STEP - state.score // LEVEL_SCORE_STEP
    for _ in range(crossed):
        level += 1
        excluded = _occupied(snake, obstacles, (pu.position for pu in power_ups))
        if food is not None:
            excluded.add(food)
        cell = _try_place(size, excluded, rng, "obstacle")
        if cell is not None:
            obstacles.append(cell)

    # Retry a food respawn that failed on an earlier tick
    if food is None:
        food = _try_place(size, _occupied(snake, obstacles), rng, "food")

    return Continue(GameState(
        size=size,
        snake=snake,
        direction=direction,
        food=food,
        obstacles=obstacles,
        power_ups=power_ups,
        score=score,
        level=level,
        step_interval=step_interval,
    ))
