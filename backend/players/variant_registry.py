"""
Registry of player kinds.

Maps keys (e.g. 'random', 'llm') to player classes so the CLI can pick one by
name. To add a kind, write the class and add a loader here.
"""

from typing import Callable, Dict, Optional, Type

from .base import Player


# Lazy imports so the LLM stack is only loaded when asked for
def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


def _get_llm_player() -> Type[Player]:
    from .llm_player import LLMPlayer
    return LLMPlayer


# Registry: maps player key -> callable that returns the player class
PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "random": _get_random_player,
    "llm": _get_llm_player,
}

AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given key.

    Args:
        variant_key: 'random' or 'llm'. If None or empty, returns the random player.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = "random"

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player kind '{variant_key}'. Available kinds: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def list_variants() -> list:
    """
    Return metadata about all available player kinds.

    Returns:
        List of dicts with 'key' and 'description' for each kind.
    """
    return [
        {"key": "random", "description": "Random safe-move autopilot"},
        {"key": "llm", "description": "LLM player via OpenRouter (needs --model and OPENROUTER_API_KEY)"},
    ]
