"""
Recoverable error conditions raised inside the engine.

Neither of these ever crosses the tick boundary: the transition engine and the
session controller absorb them locally.
"""


class PlacementExhausted(Exception):
    """The placement service could not find a free cell within its retry budget."""

    def __init__(self, attempts: int):
        super().__init__(f"No free cell found after {attempts} attempts")
        self.attempts = attempts


class InvalidDirection(ValueError):
    """An intent that is not one of the four cardinal directions."""

    def __init__(self, value):
        super().__init__(f"Invalid direction: {value!r}")
        self.value = value
