"""
Tests for food placement and the special awareness food lifecycle.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.config import WorldConfig  # noqa: E402
from domain.food import SpecialFood, advance_special, maybe_spawn_special, spawn_food  # noqa: E402
from domain.random_source import (  # noqa: E402
    FixedRandomSource,
    SequenceRandomSource,
    SystemRandomSource,
)


CONFIG = WorldConfig()

# 4x1 board: snake on the first three cells, one free cell at (3, 0)
TINY = WorldConfig(
    width=4,
    height=1,
    initial_snake=((2, 0), (1, 0), (0, 0)),
    initial_food=(3, 0),
)


class TestSpawnFood:
    """Tests for spawn_food()."""

    def test_returns_sampled_cell_when_free(self):
        rng = SequenceRandomSource([0.5, 0.5])
        assert spawn_food({(7, 10)}, CONFIG, rng) == (15, 10)

    def test_resamples_occupied_cells(self):
        # First candidate (0, 0) is taken, the second (29, 19) is free
        rng = SequenceRandomSource([0.0, 0.0, 0.99, 0.99])
        assert spawn_food({(0, 0)}, CONFIG, rng) == (29, 19)

    def test_never_spawns_on_snake(self):
        rng = SystemRandomSource(seed=1234)
        occupied = {(x, 10) for x in range(30)} | {(5, y) for y in range(20)}
        for _ in range(200):
            assert spawn_food(occupied, CONFIG, rng) not in occupied

    def test_bounded_retries_fall_back_to_free_cells(self):
        """When sampling keeps missing, the last free cell is still found."""
        rng = FixedRandomSource(0.0)
        occupied = {(0, 0), (1, 0), (2, 0)}

        assert spawn_food(occupied, TINY, rng) == (3, 0)
        # 100 rejected (x, y) samples plus one pick among free cells
        assert rng.draws == 2 * TINY.food_placement_attempts + 1

    def test_full_board_returns_none(self):
        occupied = {(0, 0), (1, 0), (2, 0), (3, 0)}
        assert spawn_food(occupied, TINY, FixedRandomSource(0.3)) is None

    def test_zero_attempts_goes_straight_to_fallback(self):
        config = TINY.with_overrides(food_placement_attempts=0)
        rng = FixedRandomSource(0.0)

        assert spawn_food({(0, 0), (1, 0)}, config, rng) == (2, 0)
        assert rng.draws == 1


class TestMaybeSpawnSpecial:
    """Tests for maybe_spawn_special()."""

    def test_keeps_live_special(self):
        live = SpecialFood(position=(3, 3), age=4)
        rng = SequenceRandomSource([0.0])

        assert maybe_spawn_special(live, 0, set(), CONFIG, rng) is live
        assert rng.draws == 0

    def test_no_spawn_at_max_awareness(self):
        rng = SequenceRandomSource([0.0])
        assert maybe_spawn_special(None, CONFIG.max_awareness, set(), CONFIG, rng) is None
        assert rng.draws == 0

    def test_failed_roll(self):
        assert maybe_spawn_special(None, 0, set(), CONFIG, FixedRandomSource(0.5)) is None

    def test_successful_roll_places_special(self):
        rng = SequenceRandomSource([0.001, 0.5, 0.5])
        special = maybe_spawn_special(None, 3, {(7, 10)}, CONFIG, rng)

        assert special == SpecialFood(position=(15, 10))
        assert special.kind == "awareness"
        assert special.blink_on is True
        assert special.age == 0

    def test_special_avoids_occupied_cells(self):
        rng = SequenceRandomSource([0.001, 0.5, 0.5, 0.0, 0.0])
        special = maybe_spawn_special(None, 0, {(15, 10)}, CONFIG, rng)
        assert special.position == (0, 0)


class TestAdvanceSpecial:
    """Tests for the special food timer."""

    def test_none_stays_none(self):
        assert advance_special(None, CONFIG) is None

    def test_age_increments(self):
        special = advance_special(SpecialFood(position=(1, 1)), CONFIG)
        assert special.age == 1
        assert special.position == (1, 1)

    def test_blink_toggles_every_period(self):
        special = SpecialFood(position=(1, 1))
        seen = []
        for _ in range(10):
            special = advance_special(special, CONFIG)
            seen.append(special.blink_on)

        assert seen[:4] == [True] * 4
        assert seen[4] is False
        assert seen[5:9] == [False] * 4
        assert seen[9] is True

    def test_expires_after_lifetime(self):
        special = SpecialFood(position=(1, 1), age=CONFIG.special_food_lifetime - 1)

        special = advance_special(special, CONFIG)
        assert special is not None
        assert special.age == CONFIG.special_food_lifetime

        assert advance_special(special, CONFIG) is None

    def test_to_dict(self):
        data = SpecialFood(position=(2, 3), age=4, blink_on=False).to_dict()
        assert data == {"x": 2, "y": 3, "kind": "awareness", "blink_on": False, "age": 4}
