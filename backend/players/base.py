"""
Base player interface: anything that produces directional intents.
"""

from domain.snapshot import BoardSnapshot


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning a move given a read-only
    snapshot of the board. The session only ever applies the latest move.
    """

    def __init__(self, name: str):
        self.name = name

    def get_move(self, snapshot: BoardSnapshot) -> str:
        """
        Return a move direction given the current board.

        Args:
            snapshot: Current state of the session

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
