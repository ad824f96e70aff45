"""
Domain entities for the Self-Aware Snake game engine.

This package contains the simulation core. It is independent of
infrastructure concerns (HTTP, CLI, files, environment).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    INACTIVE, ACTIVE, ESCAPING, BREAKING_FREE, GAME_OVER, ESCAPED,
    COLLISION_NONE, COLLISION_WALL, COLLISION_SELF,
    MAX_AWARENESS,
)
from .config import WorldConfig
from .random_source import (
    RandomSource,
    SystemRandomSource,
    SequenceRandomSource,
    FixedRandomSource,
    ScriptedRandomSource,
)
from .snake import Snake
from .food import SpecialFood
from .progression import Progression
from .deferred import DeferredScheduler, DeferredTask
from .game_state import GameState
from .session import GameSession

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'INACTIVE', 'ACTIVE', 'ESCAPING', 'BREAKING_FREE', 'GAME_OVER', 'ESCAPED',
    'COLLISION_NONE', 'COLLISION_WALL', 'COLLISION_SELF',
    'MAX_AWARENESS',
    'WorldConfig',
    'RandomSource', 'SystemRandomSource', 'SequenceRandomSource',
    'FixedRandomSource', 'ScriptedRandomSource',
    'Snake',
    'SpecialFood',
    'Progression',
    'DeferredScheduler', 'DeferredTask',
    'GameState',
    'GameSession',
]
