"""
Session controller: runs the transition engine under an external clock.

The controller owns everything with a side effect: the running/paused/game-over
flag, the high-score scalar and its persistence, and the scoreboard. It is not
thread-safe on its own; hosts that call it from several threads must hold one
lock around every call (see services.game_host).
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from domain.constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_IDENTIFIER,
    DEFAULT_STEP_INTERVAL,
    MIN_STEP_INTERVAL,
    POWER_UP_LIFETIME,
    parse_direction,
)
from domain.exceptions import InvalidDirection
from domain.game_state import GameState
from domain.snapshot import BoardSnapshot
from .transition import Continue, TickResult, tick

logger = logging.getLogger(__name__)

# Session status values
IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
GAME_OVER = "game_over"


@dataclass(frozen=True)
class ScoreboardEntry:
    identifier: str
    score: int


class SessionController:
    """
    Sequences ticks for a single player session.

    Attributes:
        state: current GameState
        status: one of 'idle', 'running', 'paused', 'game_over'
        ticks: ticks applied since the last reset
        intent: latest accepted direction, applied at the next tick
        high_score: best score seen, seeded from load_high_score
        scoreboard: append-only list of ScoreboardEntry, one per game over
        last_result: the TickResult of the most recent tick, if any
    """

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        step_interval: float = DEFAULT_STEP_INTERVAL,
        min_step_interval: float = MIN_STEP_INTERVAL,
        power_up_lifetime: float = POWER_UP_LIFETIME,
        rng: Optional[random.Random] = None,
        load_high_score: Optional[Callable[[], int]] = None,
        store_high_score: Optional[Callable[[int], None]] = None,
        request_identifier: Optional[Callable[[int], Optional[str]]] = None,
        default_identifier: str = DEFAULT_IDENTIFIER,
    ):
        self.size = size
        self.initial_step_interval = step_interval
        self.min_step_interval = min_step_interval
        self.power_up_lifetime = power_up_lifetime
        self.rng = rng or random.Random()
        self._store_high_score = store_high_score
        self.request_identifier = request_identifier
        self.default_identifier = default_identifier

        self.scoreboard: List[ScoreboardEntry] = []
        self.high_score = self._load(load_high_score)
        self.status = IDLE
        self.last_result: Optional[TickResult] = None
        self._restore_initial()

    @classmethod
    def from_config(cls, config, **kwargs) -> "SessionController":
        """Build a controller from a config.GameConfig; kwargs wire the host callbacks."""
        if "rng" not in kwargs and config.rng_seed is not None:
            kwargs["rng"] = random.Random(config.rng_seed)
        kwargs.setdefault("default_identifier", config.default_identifier)
        return cls(
            size=config.board_size,
            step_interval=config.step_interval,
            min_step_interval=config.min_step_interval,
            power_up_lifetime=config.power_up_lifetime,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        if self.status != IDLE:
            return False
        self.status = RUNNING
        logger.info("Session started (size=%s, step_interval=%.3fs)", self.size, self.state.step_interval)
        return True

    def pause(self) -> bool:
        if self.status != RUNNING:
            return False
        self.status = PAUSED
        logger.info("Session paused at tick %s", self.ticks)
        return True

    def resume(self) -> bool:
        if self.status != PAUSED:
            return False
        self.status = RUNNING
        logger.info("Session resumed at tick %s", self.ticks)
        return True

    def reset(self) -> None:
        """Restore the initial board; high score and scoreboard survive."""
        self._restore_initial()
        self.status = RUNNING
        logger.info("Session reset (high score %s, %s scoreboard entries)", self.high_score, len(self.scoreboard))

    def _restore_initial(self) -> None:
        self.state = GameState.initial(self.size, self.initial_step_interval)
        self.intent = self.state.direction
        self.ticks = 0
        self.last_result = None
        self._accumulator = 0.0
        self._since_last_tick = 0.0

    # ------------------------------------------------------------------
    # Input and clock
    # ------------------------------------------------------------------

    def set_intent(self, direction) -> bool:
        """Record the latest direction request. Invalid requests are dropped."""
        try:
            self.intent = parse_direction(direction)
        except InvalidDirection as exc:
            logger.warning("Rejected intent: %s", exc)
            return False
        return True

    def drive(self, elapsed: float) -> Optional[TickResult]:
        """
        Feed wall-clock time into the session.

        Time accumulates while running; once a full step interval has built up,
        one step's worth is taken off and a single tick runs. Paused, idle and
        finished sessions ignore the call, so the accumulator keeps its value
        across a pause.

        Returns:
            The TickResult if a tick ran, else None.
        """
        if self.status != RUNNING:
            return None

        elapsed = max(float(elapsed), 0.0)
        self._accumulator += elapsed
        self._since_last_tick += elapsed
        if self._accumulator < self.state.step_interval:
            return None

        self._accumulator -= self.state.step_interval
        # One tick per call, so carry over at most one step of backlog
        self._accumulator = min(self._accumulator, self.state.step_interval)
        since_last_tick, self._since_last_tick = self._since_last_tick, 0.0

        result = tick(
            self.state,
            self.intent,
            rng=self.rng,
            elapsed=since_last_tick,
            min_step_interval=self.min_step_interval,
            power_up_lifetime=self.power_up_lifetime,
        )
        self._apply(result)
        return result

    def _apply(self, result: TickResult) -> None:
        self.last_result = result
        if isinstance(result, Continue):
            self.state = result.state
            self.ticks += 1
            self._record_high_score(self.state.score)
            return

        self.status = GAME_OVER
        identifier = self._identifier_for(result.final_score)
        self.scoreboard.append(ScoreboardEntry(identifier, result.final_score))
        self._record_high_score(result.final_score)
        logger.info(
            "Game over after %s ticks (%s collision). %s scored %s.",
            self.ticks, result.reason, identifier, result.final_score,
        )

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def _load(self, load_high_score) -> int:
        if load_high_score is None:
            return 0
        try:
            return max(int(load_high_score() or 0), 0)
        except Exception as e:
            logger.warning("Could not load high score: %s", e)
            return 0

    def _record_high_score(self, score: int) -> None:
        if score <= self.high_score:
            return
        self.high_score = score
        if self._store_high_score is None:
            return
        try:
            self._store_high_score(score)
        except Exception as e:
            logger.warning("Could not store high score %s: %s", score, e)

    def _identifier_for(self, score: int) -> str:
        if self.request_identifier is None:
            return self.default_identifier
        try:
            identifier = self.request_identifier(score)
        except Exception as e:
            logger.warning("Identifier request failed: %s", e)
            return self.default_identifier
        if not identifier or not str(identifier).strip():
            return self.default_identifier
        return str(identifier).strip()

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.status == RUNNING

    @property
    def game_over(self) -> bool:
        return self.status == GAME_OVER

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot.from_state(
            self.state,
            tick=self.ticks,
            high_score=self.high_score,
            status=self.status,
            scoreboard=self.scoreboard,
        )
