"""
Placement service - random free cells on the toroidal board.
"""

import random
from typing import AbstractSet, Optional, Tuple

from domain.constants import MAX_PLACEMENT_ATTEMPTS
from domain.exceptions import PlacementExhausted


def place_random(
    size: int,
    excluded: AbstractSet[Tuple[int, int]],
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Tuple[int, int]:
    """
    Return a uniformly random cell in [-size, size]^2 that is not in `excluded`.

    Samples until a free cell turns up. The loop is bounded so a fully occupied
    board fails fast instead of spinning forever.

    Args:
        size: board bound
        excluded: cells that must not be returned
        rng: random source; the module-level generator when omitted
        max_attempts: sampling budget before giving up

    Raises:
        PlacementExhausted: if `max_attempts` samples all landed on excluded cells.
    """
    rng = rng or random
    for _ in range(max_attempts):
        cell = (rng.randint(-size, size), rng.randint(-size, size))
        if cell not in excluded:
            return cell
    raise PlacementExhausted(max_attempts)
