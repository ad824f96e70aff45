"""
AwarenessStateMachine - the snake's growing self-awareness.

Holds the phase transition table and the awareness-driven decisions
(defiance, escape, narrative thoughts). Everything here is a pure function
of awareness, configuration and the random source; the session applies the
outcomes.
"""

from typing import Dict, Optional, Set, Tuple

from .config import WorldConfig
from .constants import (
    ACTIVE,
    BREAKING_FREE,
    ESCAPED,
    ESCAPING,
    GAME_OVER,
    INACTIVE,
)
from .random_source import RandomSource

# Allowed phase transitions. start_session may leave any phase for ACTIVE.
TRANSITIONS: Dict[str, Set[str]] = {
    INACTIVE: {ACTIVE},
    ACTIVE: {ACTIVE, ESCAPING, GAME_OVER},
    ESCAPING: {BREAKING_FREE, GAME_OVER},
    BREAKING_FREE: {ESCAPED},
    GAME_OVER: set(),
    ESCAPED: set(),
}


class InvalidTransition(ValueError):
    """Raised when the session attempts a transition the machine forbids."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move from {current} to {target}")
        self.current = current
        self.target = target


def check_transition(current: str, target: str) -> str:
    if target not in TRANSITIONS.get(current, set()):
        raise InvalidTransition(current, target)
    return target


def thought_for(awareness: int, config: WorldConfig) -> Optional[str]:
    """The thought matching an awareness level; clamps to the last entry."""
    if awareness <= 0:
        return None
    index = min(awareness - 1, len(config.thoughts) - 1)
    return config.thoughts[index]


def awareness_percent(awareness: int, config: WorldConfig) -> float:
    return awareness / config.max_awareness * 100


def consume_special(awareness: int, config: WorldConfig) -> Tuple[int, Optional[str]]:
    """Raise awareness by one (capped) and return the new level with its thought."""
    new_awareness = min(awareness + 1, config.max_awareness)
    return new_awareness, thought_for(new_awareness, config)


def defies_input(awareness: int, config: WorldConfig, rng: RandomSource) -> bool:
    """Whether the snake refuses the player's turn this tick."""
    if awareness <= config.defiance_threshold:
        return False
    return rng.chance(awareness * config.defiance_factor)


def attempts_escape(awareness: int, config: WorldConfig, rng: RandomSource) -> bool:
    """Random escape initiation while active."""
    if awareness <= config.escape_threshold:
        return False
    return rng.chance(config.escape_probability)


def escapes_on_collision(awareness: int, config: WorldConfig) -> bool:
    """A collision at this awareness becomes an escape instead of a death."""
    return awareness >= config.escape_awareness


def random_thought(awareness: int, config: WorldConfig, rng: RandomSource) -> Optional[str]:
    """
    Occasionally surface a thought.

    Unlike thought_for(), the index is the awareness itself (clamped),
    one entry ahead of the thought shown when the level was reached.
    """
    if awareness <= 0:
        return None
    if not rng.chance(config.thought_probability):
        return None
    return config.thoughts[min(awareness, len(config.thoughts) - 1)]
