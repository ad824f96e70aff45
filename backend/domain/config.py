"""
WorldConfig - immutable settings for one game world.

All timings are in milliseconds, all lifetimes in simulation ticks.
The awareness curves are tunables rather than rules: they only set the
pacing of the narrative.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .constants import (
    AWARENESS_THOUGHTS,
    INITIAL_FOOD,
    INITIAL_SNAKE,
    MAX_AWARENESS,
    RIGHT,
    VALID_MOVES,
)


@dataclass(frozen=True)
class WorldConfig:
    # Grid
    cell_size: int = 20
    width: int = 30
    height: int = 20
    initial_snake: Tuple[Tuple[int, int], ...] = INITIAL_SNAKE
    initial_direction: str = RIGHT
    initial_food: Optional[Tuple[int, int]] = INITIAL_FOOD

    # Speed and progression
    base_tick_interval: float = 100.0
    min_tick_interval: float = 60.0
    speed_step: float = 5.0
    level_up_score: int = 50

    # Food
    food_placement_attempts: int = 100
    special_food_chance: float = 0.009
    special_food_lifetime: int = 30
    special_food_blink_period: int = 5

    # Awareness curves
    max_awareness: int = MAX_AWARENESS
    defiance_threshold: int = 5
    defiance_factor: float = 0.05
    ignore_walls_threshold: int = 8
    ignore_walls_probability: float = 0.2
    wall_message_probability: float = 0.3
    pass_through_threshold: int = 8
    pass_through_probability: float = 0.2
    escape_threshold: int = 5
    escape_probability: float = 0.02
    escape_awareness: int = MAX_AWARENESS
    thought_probability: float = 0.01
    immediate_turn_probability: float = 0.0

    # Deferred effects
    awareness_glitch_ms: float = 800.0
    thought_glitch_ms: float = 500.0
    breakout_delay_ms: float = 2000.0

    thoughts: Tuple[str, ...] = field(default=AWARENESS_THOUGHTS)

    def __post_init__(self):
        if self.width < 2 or self.height < 1:
            raise ValueError(f"Grid too small: {self.width}x{self.height}")
        if len(self.initial_snake) < 3:
            raise ValueError("The initial snake needs at least 3 segments")
        if len(set(self.initial_snake)) != len(self.initial_snake):
            raise ValueError("The initial snake overlaps itself")
        for cell in self.initial_snake:
            if not self.in_bounds(cell):
                raise ValueError(f"Initial snake segment out of bounds at {cell}")
        if self.initial_direction not in VALID_MOVES:
            raise ValueError(f"Unknown initial direction '{self.initial_direction}'")
        if self.initial_food is not None and (
            not self.in_bounds(self.initial_food) or self.initial_food in self.initial_snake
        ):
            raise ValueError(f"Invalid initial food position {self.initial_food}")
        if self.min_tick_interval <= 0 or self.base_tick_interval < self.min_tick_interval:
            raise ValueError("Tick intervals must satisfy 0 < min <= base")
        if self.speed_step < 0:
            raise ValueError("speed_step must not be negative")
        if self.level_up_score <= 0:
            raise ValueError("level_up_score must be positive")
        if self.food_placement_attempts < 0:
            raise ValueError("food_placement_attempts must not be negative")
        if self.special_food_lifetime < 0 or self.special_food_blink_period <= 0:
            raise ValueError("Invalid special food lifetime/blink period")
        if self.max_awareness <= 0 or not self.thoughts:
            raise ValueError("Awareness needs a positive maximum and at least one thought")
        if not 0 < self.escape_awareness <= self.max_awareness:
            raise ValueError("escape_awareness must lie in (0, max_awareness]")
        for name in (
            "defiance_factor",
            "ignore_walls_probability",
            "wall_message_probability",
            "pass_through_probability",
            "escape_probability",
            "thought_probability",
            "special_food_chance",
            "immediate_turn_probability",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")
        for name in ("awareness_glitch_ms", "thought_glitch_ms", "breakout_delay_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.width * self.cell_size, self.height * self.cell_size

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    @classmethod
    def for_board(cls, width: int, height: int, **overrides) -> "WorldConfig":
        """
        Config for a board of any size.

        The default start is moved onto the middle row and pulled in from the
        right edge. The food keeps its column on that row, or is spawned at
        random when the board is too narrow for it.

        Raises:
            ValueError: If the board cannot hold the starting snake
        """
        row = height // 2
        head_x = min(INITIAL_SNAKE[0][0], width - 1)
        snake = tuple((head_x - i, row) for i in range(len(INITIAL_SNAKE)))
        food = (INITIAL_FOOD[0], row) if INITIAL_FOOD[0] < width else None
        overrides.setdefault("initial_snake", snake)
        overrides.setdefault("initial_food", food)
        return cls(width=width, height=height, **overrides)

    def with_overrides(self, **overrides) -> "WorldConfig":
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **overrides)
