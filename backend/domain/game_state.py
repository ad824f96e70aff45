"""
GameState entity - a read-only snapshot of the session for the renderer.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .food import SpecialFood


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game after a simulation step.

    Attributes:
        step: number of simulation steps taken since the session started
        phase: SessionPhase value
        active: whether the session still accepts ticks
        snake: (x, y) cells, head first
        direction: current direction
        food: regular food cell (None only once the board is full)
        special_food: the live awareness food, if any
        score, level, speed: progression
        awareness: 0..max_awareness
        awareness_percent: awareness as a 0-100 display value
        message: current narrative message
        glitch, breaking_free: visual-effect flags
        width, height: board dimensions
    """

    step: int
    phase: str
    active: bool
    snake: Tuple[Tuple[int, int], ...]
    direction: str
    food: Optional[Tuple[int, int]]
    special_food: Optional[SpecialFood]
    score: int
    level: int
    speed: float
    awareness: int
    awareness_percent: float
    message: str
    glitch: bool
    breaking_free: bool
    width: int
    height: int

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = food
        * = special food
        H = snake head
        T = snake body
        Segments that left the board during a breakout are not drawn.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'A'

        if self.special_food is not None:
            sx, sy = self.special_food.position
            board[sy][sx] = '*'

        for pos_idx, (x, y) in enumerate(self.snake):
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        # Row 0 is the top of the screen
        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))
        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form used by the API and replays."""
        return {
            "step": self.step,
            "phase": self.phase,
            "active": self.active,
            "snake": [list(cell) for cell in self.snake],
            "direction": self.direction,
            "food": list(self.food) if self.food is not None else None,
            "special_food": self.special_food.to_dict() if self.special_food else None,
            "score": self.score,
            "level": self.level,
            "speed": self.speed,
            "awareness": self.awareness,
            "awareness_percent": self.awareness_percent,
            "message": self.message,
            "glitch": self.glitch,
            "breaking_free": self.breaking_free,
            "width": self.width,
            "height": self.height,
        }

    def __repr__(self):
        return (
            f"<GameState step={self.step}, phase={self.phase}, head={self.head}, "
            f"score={self.score}, awareness={self.awareness}>"
        )
