"""
Base player interface for the game engine.

A player stands in for the keyboard: given the latest snapshot it returns
the direction it wants, or None to keep going straight.
"""

from typing import Optional

from domain.game_state import GameState


class Player:
    """
    Base class/interface for input collectors.

    Each player is responsible for returning a directional intent given the
    current game state. The session decides whether to honour it.
    """

    name = "player"

    def get_move(self, game_state: GameState) -> Optional[str]:
        """
        Return a direction given the current game state.

        Args:
            game_state: Latest snapshot of the session

        Returns:
            One of "UP", "DOWN", "LEFT", "RIGHT", or None for no input
        """
        raise NotImplementedError
