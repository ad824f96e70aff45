"""
Scripted player - replays a fixed list of moves, one per simulation step.
"""

from typing import Dict, Iterable, Optional

from domain.constants import VALID_MOVES
from domain.game_state import GameState
from .base import Player


class ScriptedPlayer(Player):
    """
    Returns the move scheduled for the step shown in the snapshot.

    Moves are given as {step: direction}; steps without an entry yield None.
    """

    name = "scripted"

    def __init__(self, moves: Dict[int, str]):
        for step, move in moves.items():
            if move not in VALID_MOVES:
                raise ValueError(f"Invalid move '{move}' at step {step}")
        self.moves = dict(moves)

    @classmethod
    def from_sequence(cls, moves: Iterable[Optional[str]]) -> "ScriptedPlayer":
        """Build from a list where index i is the move before step i + 1."""
        return cls({step: move for step, move in enumerate(moves) if move is not None})

    def get_move(self, game_state: GameState) -> Optional[str]:
        return self.moves.get(game_state.step)
