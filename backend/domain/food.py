"""
FoodManager - regular food and special awareness food.
"""

import logging
from dataclasses import dataclass, replace
from typing import AbstractSet, Optional, Tuple

from .config import WorldConfig
from .constants import SPECIAL_FOOD_KIND
from .random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialFood:
    position: Tuple[int, int]
    kind: str = SPECIAL_FOOD_KIND
    blink_on: bool = True
    age: int = 0

    def to_dict(self) -> dict:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "kind": self.kind,
            "blink_on": self.blink_on,
            "age": self.age,
        }


def spawn_food(
    occupied: AbstractSet[Tuple[int, int]],
    config: WorldConfig,
    rng: RandomSource,
) -> Optional[Tuple[int, int]]:
    """
    Return a random free cell, or None when the board is full.

    Samples uniformly with rejection for a bounded number of attempts, then
    picks uniformly among the cells that are still free.
    """
    for _ in range(config.food_placement_attempts):
        cell = (rng.randrange(config.width), rng.randrange(config.height))
        if cell not in occupied:
            return cell

    free_cells = [
        (x, y)
        for y in range(config.height)
        for x in range(config.width)
        if (x, y) not in occupied
    ]
    if not free_cells:
        logger.warning("No free cell left for food on a %dx%d board", config.width, config.height)
        return None
    return free_cells[rng.randrange(len(free_cells))]


def maybe_spawn_special(
    current: Optional[SpecialFood],
    awareness: int,
    occupied: AbstractSet[Tuple[int, int]],
    config: WorldConfig,
    rng: RandomSource,
) -> Optional[SpecialFood]:
    """
    Roll for a new special food.

    Returns the live special food unchanged when one exists, and None when
    awareness is maxed out, the roll fails or there is no room.
    """
    if current is not None:
        return current
    if awareness >= config.max_awareness:
        return None
    if not rng.chance(config.special_food_chance):
        return None

    cell = spawn_food(occupied, config, rng)
    if cell is None:
        return None
    logger.debug("Special food spawned at %s", cell)
    return SpecialFood(position=cell)


def advance_special(special: Optional[SpecialFood], config: WorldConfig) -> Optional[SpecialFood]:
    """Age the special food by one tick, toggling the blink and expiring it."""
    if special is None:
        return None

    age = special.age + 1
    if age > config.special_food_lifetime:
        logger.debug("Special food at %s expired", special.position)
        return None

    blink_on = special.blink_on
    if age % config.special_food_blink_period == 0:
        blink_on = not blink_on
    return replace(special, age=age, blink_on=blink_on)
