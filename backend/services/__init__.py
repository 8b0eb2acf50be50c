"""
Hosting services around the engine.
"""

from .game_host import GameHost

__all__ = ['GameHost']
