"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Tuple


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]):
        self.positions = deque(tuple(p) for p in positions)
        if not self.positions:
            raise ValueError("A snake needs at least one segment")

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def __len__(self) -> int:
        return len(self.positions)

    def advanced(self, new_head: Tuple[int, int], grow: bool = False) -> "Snake":
        """
        Return the snake after moving its head to new_head.

        The tail is kept when growing, dropped otherwise.
        """
        body = [new_head] + list(self.positions)
        if not grow:
            body.pop()
        return Snake(body)

    def __eq__(self, other) -> bool:
        return isinstance(other, Snake) and self.positions == other.positions

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self)}>"
