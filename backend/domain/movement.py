"""
MovementEngine - computes where the head goes next.

Pure functions: they take the pieces of session state they need and return
a MoveResult. The session decides what to do with it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import WorldConfig
from .constants import DIRECTION_DELTA, MSG_SEE_THROUGH_WALLS, OPPOSITE, RIGHT, VALID_MOVES
from .random_source import RandomSource


@dataclass(frozen=True)
class MoveResult:
    head: Tuple[int, int]
    direction: str
    wrapped: bool = False
    breakout: bool = False
    message: Optional[str] = None


def is_reverse(current: str, requested: str) -> bool:
    """True when requested is a 180 degree turn from current."""
    return OPPOSITE.get(current) == requested


def resolve_direction(current: str, pending: Optional[str]) -> str:
    """
    Return the effective direction for this step.

    A missing or reversing pending direction leaves the current one in place.
    """
    if pending is None or pending not in VALID_MOVES or is_reverse(current, pending):
        return current
    return pending


def step(cell: Tuple[int, int], direction: str) -> Tuple[int, int]:
    dx, dy = DIRECTION_DELTA[direction]
    return cell[0] + dx, cell[1] + dy


def wrap(cell: Tuple[int, int], config: WorldConfig) -> Tuple[int, int]:
    """Wrap an off-board cell to the opposite edge."""
    x, y = cell
    return x % config.width, y % config.height


def ignores_walls(awareness: int, config: WorldConfig, rng: RandomSource) -> bool:
    if awareness <= config.ignore_walls_threshold:
        return False
    return rng.chance(config.ignore_walls_probability)


def compute_next_head(
    head: Tuple[int, int],
    direction: str,
    pending_direction: Optional[str],
    awareness: int,
    escape_active: bool,
    config: WorldConfig,
    rng: RandomSource,
) -> MoveResult:
    """
    Compute the next head cell.

    While escaping the snake always heads right; stepping past the rightmost
    column is reported as a breakout rather than a move. Otherwise, an
    off-board head is wrapped when the snake currently ignores walls, and is
    left off-board (for the collision detector) when it does not.
    """
    if escape_active:
        if head[0] >= config.width - 1:
            return MoveResult(head=step(head, RIGHT), direction=RIGHT, breakout=True)
        return MoveResult(head=step(head, RIGHT), direction=RIGHT)

    effective = resolve_direction(direction, pending_direction)
    new_head = step(head, effective)

    if config.in_bounds(new_head):
        return MoveResult(head=new_head, direction=effective)

    if not ignores_walls(awareness, config, rng):
        return MoveResult(head=new_head, direction=effective)

    message = None
    if rng.chance(config.wall_message_probability):
        message = MSG_SEE_THROUGH_WALLS
    return MoveResult(head=wrap(new_head, config), direction=effective, wrapped=True, message=message)
