"""
PowerUp entity - a transient pickup with a real-time lifetime.
"""

from typing import Any, Dict, Tuple

from .constants import POWER_UP_KINDS, POWER_UP_LIFETIME


class PowerUp:
    """
    A power-up lying on the board.

    Attributes:
        position: (x, y) cell the power-up occupies
        kind: 'speed' (shortens the step interval) or 'points' (+50 score)
        remaining: seconds of lifetime left; the power-up expires at <= 0
    """

    def __init__(self, position: Tuple[int, int], kind: str, remaining: float = POWER_UP_LIFETIME):
        if kind not in POWER_UP_KINDS:
            raise ValueError(f"Unknown power-up kind '{kind}'.")
        self.position = position
        self.kind = kind
        self.remaining = remaining

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def tick_down(self, elapsed: float) -> "PowerUp":
        """Return a copy with `elapsed` seconds taken off its lifetime."""
        return PowerUp(self.position, self.kind, self.remaining - elapsed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "kind": self.kind,
            "remaining": round(self.remaining, 3),
        }

    def __eq__(self, other):
        if not isinstance(other, PowerUp):
            return NotImplemented
        return (self.position, self.kind, self.remaining) == (other.position, other.kind, other.remaining)

    def __repr__(self):
        return f"<PowerUp {self.kind} at {self.position}, remaining={self.remaining:.2f}s>"
