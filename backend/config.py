"""
Environment-driven configuration.

Values come from the process environment, with a local .env file loaded first.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from domain.constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_IDENTIFIER,
    DEFAULT_STEP_INTERVAL,
    MIN_STEP_INTERVAL,
    POWER_UP_LIFETIME,
)

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    step_interval: float = DEFAULT_STEP_INTERVAL
    min_step_interval: float = MIN_STEP_INTERVAL
    power_up_lifetime: float = POWER_UP_LIFETIME
    rng_seed: Optional[int] = None
    host_fps: int = 60
    default_identifier: str = DEFAULT_IDENTIFIER
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "GameConfig":
        """
        Read the SNAKE_* variables (plus LOG_LEVEL and CORS_ALLOWED_ORIGINS).

        Raises:
            ValueError: if a numeric variable does not parse, or a value is out of range.
        """
        origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
        if origins_env:
            origins = [o.strip() for o in origins_env.split(",") if o.strip()]
        else:
            origins = list(DEFAULT_CORS_ORIGINS)

        config = cls(
            board_size=_env_int("SNAKE_BOARD_SIZE", DEFAULT_BOARD_SIZE),
            step_interval=_env_float("SNAKE_STEP_INTERVAL", DEFAULT_STEP_INTERVAL),
            min_step_interval=_env_float("SNAKE_MIN_STEP_INTERVAL", MIN_STEP_INTERVAL),
            power_up_lifetime=_env_float("SNAKE_POWER_UP_LIFETIME", POWER_UP_LIFETIME),
            rng_seed=_env_int("SNAKE_RNG_SEED", None),
            host_fps=_env_int("SNAKE_HOST_FPS", 60),
            default_identifier=os.getenv("SNAKE_DEFAULT_IDENTIFIER") or DEFAULT_IDENTIFIER,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            cors_origins=origins,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.board_size < 3:
            raise ValueError("SNAKE_BOARD_SIZE must be at least 3 to fit the starting snake and food.")
        if self.step_interval <= 0 or self.min_step_interval <= 0:
            raise ValueError("Step intervals must be positive.")
        if self.host_fps <= 0:
            raise ValueError("SNAKE_HOST_FPS must be positive.")
