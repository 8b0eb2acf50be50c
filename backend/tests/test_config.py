"""
Tests for environment-driven configuration (config.py).
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import DEFAULT_CORS_ORIGINS, GameConfig  # noqa: E402

ENV_NAMES = [
    "SNAKE_BOARD_SIZE",
    "SNAKE_STEP_INTERVAL",
    "SNAKE_MIN_STEP_INTERVAL",
    "SNAKE_POWER_UP_LIFETIME",
    "SNAKE_RNG_SEED",
    "SNAKE_HOST_FPS",
    "SNAKE_DEFAULT_IDENTIFIER",
    "LOG_LEVEL",
    "CORS_ALLOWED_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestGameConfig:

    def test_defaults(self, clean_env):
        config = GameConfig.from_env()
        assert config.board_size == 20
        assert config.step_interval == 0.2
        assert config.min_step_interval == 0.02
        assert config.power_up_lifetime == 5.0
        assert config.rng_seed is None
        assert config.host_fps == 60
        assert config.default_identifier == "AAA"
        assert config.log_level == "INFO"
        assert config.cors_origins == DEFAULT_CORS_ORIGINS

    def test_values_from_environment(self, clean_env):
        clean_env.setenv("SNAKE_BOARD_SIZE", "8")
        clean_env.setenv("SNAKE_STEP_INTERVAL", "0.5")
        clean_env.setenv("SNAKE_RNG_SEED", "42")
        clean_env.setenv("SNAKE_DEFAULT_IDENTIFIER", "JOE")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example,")

        config = GameConfig.from_env()

        assert config.board_size == 8
        assert config.step_interval == 0.5
        assert config.rng_seed == 42
        assert config.default_identifier == "JOE"
        assert config.log_level == "DEBUG"
        assert config.cors_origins == ["https://a.example", "https://b.example"]

    def test_blank_values_use_defaults(self, clean_env):
        clean_env.setenv("SNAKE_BOARD_SIZE", "  ")
        clean_env.setenv("SNAKE_RNG_SEED", "")
        config = GameConfig.from_env()
        assert config.board_size == 20
        assert config.rng_seed is None

    def test_non_numeric_value_raises(self, clean_env):
        clean_env.setenv("SNAKE_STEP_INTERVAL", "fast")
        with pytest.raises(ValueError, match="SNAKE_STEP_INTERVAL"):
            GameConfig.from_env()

    @pytest.mark.parametrize("name,value", [
        ("SNAKE_BOARD_SIZE", "2"),
        ("SNAKE_STEP_INTERVAL", "0"),
        ("SNAKE_MIN_STEP_INTERVAL", "-1"),
        ("SNAKE_HOST_FPS", "0"),
    ])
    def test_out_of_range_values_raise(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValueError):
            GameConfig.from_env()

    def test_defaults_do_not_share_origin_list(self):
        first = GameConfig()
        first.cors_origins.append("https://extra.example")
        assert GameConfig().cors_origins == DEFAULT_CORS_ORIGINS
