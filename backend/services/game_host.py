"""
Thread-safe host for one snake session.

Wraps a SessionController behind a single lock so HTTP handlers and the clock
thread never interleave inside a tick, and runs a fixed-rate clock thread that
feeds wall-clock deltas into `drive`.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

from data_access import load_high_score, store_high_score
from engine.session import SessionController

logger = logging.getLogger(__name__)


class GameHost:
    """
    Owns the controller, its lock and the clock thread.

    Attributes:
        controller: the wrapped SessionController
        fps: clock frequency in calls to drive() per second
    """

    def __init__(self, controller: SessionController, fps: int = 60):
        self.controller = controller
        self.fps = fps
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._pending_identifier: Optional[str] = None
        controller.request_identifier = self._take_identifier

    @classmethod
    def from_config(cls, config, persist: bool = True) -> "GameHost":
        kwargs = {}
        if persist:
            kwargs["load_high_score"] = load_high_score
            kwargs["store_high_score"] = store_high_score
        controller = SessionController.from_config(config, **kwargs)
        return cls(controller, fps=config.host_fps)

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def start_clock(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run_clock, name="snake-clock", daemon=True)
        self._thread.start()
        logger.info("Clock started at %s fps", self.fps)

    def stop_clock(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Clock stopped")

    def _run_clock(self) -> None:
        period = 1.0 / self.fps
        last = time.monotonic()
        while not self._stop.wait(period):
            now = time.monotonic()
            self.drive(now - last)
            last = now

    # ------------------------------------------------------------------
    # Controller operations, each under the lock
    # ------------------------------------------------------------------

    def drive(self, elapsed: float):
        with self._lock:
            return self.controller.drive(elapsed)

    def start(self) -> bool:
        with self._lock:
            return self.controller.start()

    def pause(self) -> bool:
        with self._lock:
            return self.controller.pause()

    def resume(self) -> bool:
        with self._lock:
            return self.controller.resume()

    def reset(self) -> None:
        with self._lock:
            self.controller.reset()

    def set_intent(self, direction) -> bool:
        with self._lock:
            return self.controller.set_intent(direction)

    def set_identifier(self, name: Optional[str]) -> None:
        """Remember the name to record at the next game over only."""
        with self._lock:
            self._pending_identifier = name.strip() if name else None

    def _take_identifier(self, score: int) -> Optional[str]:
        # Called by the controller from inside drive(), so the lock is already held.
        name, self._pending_identifier = self._pending_identifier, None
        return name

    def state(self) -> Dict[str, Any]:
        with self._lock:
            return self.controller.snapshot().to_dict()
