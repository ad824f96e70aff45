"""
Tests for main.py (headless runner) and the environment-driven settings.
"""

import argparse
import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.config import WorldConfig  # noqa: E402
from domain.constants import ESCAPED, GAME_OVER, INACTIVE  # noqa: E402
from main import build_parser, main, run_simulation  # noqa: E402
from services.replay_storage import load_replay  # noqa: E402
from settings import config_overrides, get_log_level, load_world_config  # noqa: E402


def make_params(**overrides):
    params = {
        "seed": 11,
        "player": "greedy",
        "max_steps": 200,
        "print_every": 0,
        "save_replay": False,
        "replay_dir": None,
        "game_id": None,
    }
    params.update(overrides)
    return argparse.Namespace(**params)


class TestRunSimulation:
    """Tests for run_simulation()."""

    def test_returns_summary(self):
        result = run_simulation(WorldConfig(), make_params())

        assert set(result) == {
            "game_id", "phase", "score", "level", "awareness", "steps", "message", "replay_path",
        }
        assert result["phase"] in (GAME_OVER, ESCAPED, INACTIVE)
        assert result["steps"] <= 200
        assert result["score"] % 10 == 0
        assert result["replay_path"] is None

    def test_same_seed_same_game(self):
        first = run_simulation(WorldConfig(), make_params(game_id="a"))
        second = run_simulation(WorldConfig(), make_params(game_id="a"))

        first.pop("replay_path")
        second.pop("replay_path")
        assert first == second

    def test_step_limit(self):
        result = run_simulation(WorldConfig(), make_params(max_steps=3))

        assert result["steps"] == 3
        assert result["phase"] == INACTIVE

    def test_saves_replay(self, tmp_path):
        params = make_params(save_replay=True, replay_dir=str(tmp_path), game_id="saved-game")

        result = run_simulation(WorldConfig(), params)

        assert result["replay_path"] == str(tmp_path / "saved-game" / "replay.json")
        data = load_replay(result["replay_path"])
        assert data["metadata"]["seed"] == 11
        assert data["metadata"]["steps"] == result["steps"]

    def test_prints_board(self, capsys):
        run_simulation(WorldConfig(), make_params(max_steps=2, print_every=1))

        out = capsys.readouterr().out
        assert "Step 1 |" in out
        assert "H" in out


class TestMain:
    """Tests for the CLI entry point."""

    def test_parser_defaults(self):
        args = build_parser().parse_args([])

        assert args.player == "greedy"
        assert args.max_steps == 5000
        assert args.print_every == 0
        assert args.save_replay is False

    def test_rejects_unknown_player(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--player", "llm"])

    def test_main_on_narrow_board(self):
        result = main(["--width", "10", "--height", "8", "--seed", "1", "--max-steps", "5"])
        assert result["steps"] <= 5

    def test_board_too_small_is_reported(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--width", "2"])

        assert exc.value.code == 2
        assert "out of bounds" in capsys.readouterr().err

    def test_main_runs_a_game(self, capsys):
        result = main(["--seed", "3", "--max-steps", "20", "--height", "25"])

        assert result["steps"] <= 20
        assert "Simulation Result Summary" in capsys.readouterr().out


class TestSettings:
    """Tests for the SNAKE_* environment overrides."""

    def test_no_env_gives_defaults(self):
        assert load_world_config(env={}) == WorldConfig()

    def test_numeric_overrides(self):
        env = {"SNAKE_WIDTH": "40", "SNAKE_ESCAPE_PROBABILITY": "0.05"}
        config = load_world_config(env=env)

        assert config.width == 40
        assert isinstance(config.width, int)
        assert config.escape_probability == 0.05

    def test_quoted_values_are_cleaned(self):
        assert config_overrides({"SNAKE_HEIGHT": ' "24" '}) == {"height": 24}

    def test_empty_values_are_ignored(self):
        assert config_overrides({"SNAKE_HEIGHT": "  "}) == {}

    def test_bad_number_raises(self):
        with pytest.raises(ValueError) as exc:
            load_world_config(env={"SNAKE_WIDTH": "wide"})
        assert "SNAKE_WIDTH" in str(exc.value)

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError):
            load_world_config(env={"SNAKE_ESCAPE_PROBABILITY": "2"})

    def test_keyword_overrides_win(self):
        config = load_world_config(env={"SNAKE_WIDTH": "40"}, width=35, height=None)
        assert config.width == 35
        assert config.height == 20

    def test_narrow_board_from_env(self):
        config = load_world_config(env={"SNAKE_WIDTH": "10"})

        assert config.initial_snake == ((7, 10), (6, 10), (5, 10))
        assert config.initial_food is None

    def test_short_board_moves_start_to_middle_row(self):
        config = load_world_config(env={}, height=9)

        assert config.initial_snake == ((7, 4), (6, 4), (5, 4))
        assert config.initial_food == (15, 4)

    def test_non_numeric_fields_stay_code_only(self):
        assert config_overrides({"SNAKE_INITIAL_DIRECTION": "UP"}) == {}

    def test_log_level(self):
        assert get_log_level({}) == "INFO"
        assert get_log_level({"LOG_LEVEL": "'debug'"}) == "DEBUG"
