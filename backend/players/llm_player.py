"""
LLM-based player - asks a language model for the next direction.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from domain.constants import DIRECTION_NAMES, FOOD_POINTS, POWER_UP_POINTS
from domain.snapshot import BoardSnapshot
from llm_providers import create_llm_provider
from .base import Player
from .random_player import safe_moves

logger = logging.getLogger(__name__)


class LLMPlayer(Player):
    """
    LLM-based player that delegates the API call details to the provider abstraction.

    Falls back to a random safe move when the provider fails or the reply
    does not contain a direction.
    """

    def __init__(self, player_config: Dict[str, Any], provider=None, rng: Optional[random.Random] = None):
        super().__init__(player_config['name'])
        self.config = player_config
        self.move_history: List[Dict[str, Any]] = []
        self.total_input_tokens = 0
        self.total_output_tokens = 0
        self.rng = rng or random.Random()
        # Instantiate the provider from the player_config unless one is injected.
        self.provider = provider or create_llm_provider(player_config)

    def get_direction_from_response(self, response: str) -> Optional[str]:
        """
        Parse the LLM response to extract a direction.
        Looks for the last valid direction mentioned in the response.
        """
        response = response.upper()
        for i in range(len(response) - 1, -1, -1):
            for move in DIRECTION_NAMES.values():
                if response[i:].startswith(move):
                    return move
        return None

    def _fallback_move(self, snapshot: BoardSnapshot) -> str:
        moves = safe_moves(snapshot) or [snapshot.direction]
        return self.rng.choice(moves)

    def get_move(self, snapshot: BoardSnapshot) -> str:
        """
        Construct the prompt, call the provider, and parse the response.

        Returns:
            The chosen direction name.
        """
        prompt = self._construct_prompt(snapshot)

        try:
            response_data = self.provider.get_response(prompt)
            response_text = response_data["text"]
            self.total_input_tokens += response_data.get("input_tokens", 0)
            self.total_output_tokens += response_data.get("output_tokens", 0)
        except Exception as exc:  # noqa: BLE001
            direction = self._fallback_move(snapshot)
            logger.warning(
                "Provider error for %s: %s. Falling back to %s.", self.name, exc, direction
            )
            self.move_history.append({
                "tick": snapshot.tick,
                "direction": direction,
                "rationale": f"Provider error: {exc}. Generated random move {direction}.",
            })
            return direction

        direction = self.get_direction_from_response(response_text)
        if direction is None:
            direction = self._fallback_move(snapshot)
            preview = response_text[-50:]
            logger.warning(
                "%s returned no direction (last 50 chars: %r). Choosing %s.", self.name, preview, direction
            )
            response_text += f"\n\nThis is a random move: {direction}"

        self.move_history.append({
            "tick": snapshot.tick,
            "direction": direction,
            "rationale": response_text,
        })
        return direction

    def _construct_prompt(self, snapshot: BoardSnapshot) -> str:
        body = snapshot.snake[1:]
        power_ups = ", ".join(
            f"{pu['kind']} at {tuple(pu['position'])} ({pu['remaining']:.1f}s left)"
            for pu in snapshot.power_ups
        ) or "none"
        last = self.move_history[-1] if self.move_history else None

        prompt = (
            f"You are controlling a snake on a wrap-around grid. "
            f"Coordinates range from {-snapshot.size} to {snapshot.size} on both axes; "
            f"leaving one edge re-enters on the opposite edge.\n"
            f"Your head: {snapshot.head}\n"
            f"Your body: {body if body else 'none'}\n"
            f"Current direction: {snapshot.direction}\n"
            f"Food at: {snapshot.food}\n"
            f"Obstacles: {snapshot.obstacles if snapshot.obstacles else 'none'}\n"
            f"Power-ups: {power_ups}\n"
            f"Score: {snapshot.score}, level: {snapshot.level}\n\n"
            f"Board state (H = head, T = body, F = food, # = obstacle, S/P = power-ups):\n"
            f"{snapshot.print_board()}\n\n"
            f"Your last move: {last['direction'] if last else 'None'}\n\n"
            "Rules:\n"
            f"1) Food is worth {FOOD_POINTS} points and makes you one cell longer.\n"
            f"2) A points power-up is worth {POWER_UP_POINTS}; a speed power-up makes the game faster.\n"
            "3) Running into an obstacle or your own body ends the game. You cannot reverse direction.\n\n"
            "Increasing x is RIGHT, increasing y is UP.\n"
            "You may think out loud first. The final non-empty line of your response must be only one word "
            "with your next move (UP, DOWN, LEFT, or RIGHT).\n"
        )
        return prompt
