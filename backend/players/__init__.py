"""
Player implementations: the sources of directional intents.

A player looks at a read-only BoardSnapshot and returns the next direction.
The LLM player is loaded lazily through the registry.
"""

from .base import Player
from .random_player import RandomPlayer, safe_moves
from .keymap import KEY_DIRECTIONS, direction_from_key
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'safe_moves',
    'KEY_DIRECTIONS',
    'direction_from_key',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
