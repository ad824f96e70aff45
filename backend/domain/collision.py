"""
CollisionDetector - wall and self collision checks.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .config import WorldConfig
from .constants import COLLISION_NONE, COLLISION_SELF, COLLISION_WALL
from .random_source import RandomSource


@dataclass(frozen=True)
class CollisionResult:
    kind: str
    # The collision that really happened, even when the result was overridden
    actual: str = COLLISION_NONE

    @property
    def collided(self) -> bool:
        return self.kind != COLLISION_NONE

    @property
    def passed_through(self) -> bool:
        return self.kind == COLLISION_NONE and self.actual != COLLISION_NONE


def check_collision(
    body: Iterable[Tuple[int, int]],
    proposed_head: Tuple[int, int],
    config: WorldConfig,
) -> str:
    """
    Return WALL, SELF or NONE for the proposed head.

    body is the snake before the move: the tail still counts, since it stays
    in place when the snake grows this tick.
    """
    if not config.in_bounds(proposed_head):
        return COLLISION_WALL
    if proposed_head in set(body):
        return COLLISION_SELF
    return COLLISION_NONE


def detect(
    body: Iterable[Tuple[int, int]],
    proposed_head: Tuple[int, int],
    awareness: int,
    config: WorldConfig,
    rng: RandomSource,
) -> CollisionResult:
    """
    Collision check with the awareness override.

    Above the pass-through threshold a single draw may turn a real collision
    into NONE. No draw happens when there is nothing to override.
    """
    actual = check_collision(body, proposed_head, config)
    if actual == COLLISION_NONE:
        return CollisionResult(kind=COLLISION_NONE)

    if awareness > config.pass_through_threshold and rng.chance(config.pass_through_probability):
        return CollisionResult(kind=COLLISION_NONE, actual=actual)

    return CollisionResult(kind=actual, actual=actual)
