"""
Tests for the autopilot players and the variant registry.
"""

import dataclasses
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.config import WorldConfig  # noqa: E402
from domain.constants import DOWN, GAME_OVER, LEFT, RIGHT, UP  # noqa: E402
from domain.random_source import FixedRandomSource  # noqa: E402
from domain.session import GameSession  # noqa: E402
from domain.snake import Snake  # noqa: E402
from players import AVAILABLE_VARIANTS, RandomPlayer, ScriptedPlayer, get_player, list_variants  # noqa: E402


def make_state(snake, direction=RIGHT, food=(15, 10), phase=None, step=0):
    session = GameSession(config=WorldConfig(), rng=FixedRandomSource(0.99))
    session.start_session()
    state = session.snapshot()
    overrides = {"snake": tuple(snake), "direction": direction, "food": food, "step": step}
    if phase is not None:
        overrides["phase"] = phase
    return dataclasses.replace(state, **overrides)


class TestRandomPlayer:
    """Tests for the safe-move autopilot."""

    def test_never_reverses(self):
        state = make_state([(7, 10), (6, 10), (5, 10)])
        assert LEFT not in RandomPlayer().safe_moves(state)

    def test_corner_avoids_walls(self):
        state = make_state([(0, 0), (1, 0), (2, 0)], direction=LEFT)
        assert RandomPlayer().safe_moves(state) == [DOWN]

    def test_avoids_own_body(self):
        # Body wraps around the head on the right and below
        snake = [(5, 5), (5, 4), (6, 4), (6, 5), (6, 6), (5, 6), (4, 6)]
        state = make_state(snake, direction=DOWN)
        assert RandomPlayer().safe_moves(state) == [LEFT]

    def test_tail_cell_is_not_safe(self):
        snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
        state = make_state(snake, direction=LEFT)
        assert RandomPlayer().safe_moves(state) == [LEFT, UP]

    def test_moving_into_tail_ends_the_game(self):
        """The session collides with the pre-move tail, so the player must avoid it."""
        snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
        assert DOWN not in RandomPlayer().safe_moves(make_state(snake, direction=LEFT))

        session = GameSession(config=WorldConfig(), rng=FixedRandomSource(0.99))
        session.start_session()
        session.snake = Snake(snake)
        session.direction = LEFT
        session.pending_direction = LEFT

        session.submit_direction(DOWN)
        assert session.tick(100).phase == GAME_OVER

    def test_only_tail_cell_left_means_no_move(self):
        snake = [(0, 0), (1, 0), (1, 1), (0, 1)]
        state = make_state(snake, direction=LEFT)

        assert RandomPlayer().safe_moves(state) == []
        assert RandomPlayer().get_move(state) is None

    def test_greedy_heads_for_food(self):
        state = make_state([(7, 10), (6, 10), (5, 10)], food=(7, 2))
        assert RandomPlayer(rng=FixedRandomSource(0.5)).get_move(state) == UP

    def test_random_mode_uses_rng(self):
        state = make_state([(7, 10), (6, 10), (5, 10)])
        # Safe moves in sorted order: DOWN, RIGHT, UP
        assert RandomPlayer(rng=FixedRandomSource(0.0), greedy=False).get_move(state) == DOWN
        assert RandomPlayer(rng=FixedRandomSource(0.99), greedy=False).get_move(state) == UP

    def test_no_move_when_trapped(self):
        state = make_state([(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)], direction=LEFT)
        assert RandomPlayer().get_move(state) is None

    def test_no_move_when_not_active(self):
        state = make_state([(7, 10), (6, 10), (5, 10)], phase=GAME_OVER)
        assert RandomPlayer().get_move(state) is None


class TestScriptedPlayer:
    """Tests for ScriptedPlayer."""

    def test_returns_move_for_step(self):
        player = ScriptedPlayer({0: UP, 3: LEFT})
        assert player.get_move(make_state([(7, 10), (6, 10), (5, 10)], step=0)) == UP
        assert player.get_move(make_state([(7, 10), (6, 10), (5, 10)], step=1)) is None
        assert player.get_move(make_state([(7, 10), (6, 10), (5, 10)], step=3)) == LEFT

    def test_from_sequence(self):
        player = ScriptedPlayer.from_sequence([None, DOWN, None, RIGHT])
        assert player.moves == {1: DOWN, 3: RIGHT}

    def test_rejects_invalid_moves(self):
        with pytest.raises(ValueError):
            ScriptedPlayer({0: "JUMP"})


class TestVariantRegistry:
    """Tests for get_player() and list_variants()."""

    def test_default_is_greedy(self):
        player = get_player()
        assert isinstance(player, RandomPlayer)
        assert player.greedy is True

    def test_random_variant(self):
        player = get_player(" random ")
        assert isinstance(player, RandomPlayer)
        assert player.greedy is False

    def test_passes_rng(self):
        rng = FixedRandomSource(0.5)
        assert get_player("greedy", rng=rng).rng is rng

    def test_unknown_variant_raises(self):
        with pytest.raises(ValueError) as exc:
            get_player("llm")
        assert "greedy" in str(exc.value)

    def test_list_variants_matches_registry(self):
        assert [entry["key"] for entry in list_variants()] == AVAILABLE_VARIANTS
