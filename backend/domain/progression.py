"""
ProgressionTracker - score, level and speed.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import WorldConfig
from .constants import MSG_LEVEL_UP, POINTS_PER_FOOD


@dataclass(frozen=True)
class Progression:
    score: int = 0
    level: int = 1
    speed: float = 100.0

    @classmethod
    def initial(cls, config: WorldConfig) -> "Progression":
        return cls(score=0, level=1, speed=config.base_tick_interval)


def on_food_eaten(progression: Progression, config: WorldConfig) -> Tuple[Progression, Optional[str]]:
    """
    Apply one regular food.

    Returns the new progression and a level-up message when the level changed.
    """
    score = progression.score + POINTS_PER_FOOD
    if score > 0 and score % config.level_up_score == 0:
        level = progression.level + 1
        speed = max(progression.speed - config.speed_step, config.min_tick_interval)
        updated = replace(progression, score=score, level=level, speed=speed)
        return updated, MSG_LEVEL_UP.format(level=level)

    return replace(progression, score=score), None
