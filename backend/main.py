"""
Headless runner for Self-Aware Snake.

Plays one game with an autopilot on a simulated clock, printing the board
as it goes, and optionally saves the replay.

    python main.py --seed 7 --player greedy --print-every 10 --save-replay
"""

import argparse
import json
import logging
import uuid
from typing import Any, Dict, Optional

from domain.config import WorldConfig
from domain.game_state import GameState
from domain.random_source import SystemRandomSource
from domain.session import GameSession
from players import AVAILABLE_VARIANTS, get_player
from services.game_loop import GameLoop, SimulatedClock
from services.replay_storage import ReplayRecorder, save_replay
from settings import configure_logging, load_world_config

logger = logging.getLogger(__name__)


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    config: WorldConfig,
    game_params: argparse.Namespace,
) -> Dict[str, Any]:
    """
    Runs a single headless game.

    Args:
        config: world settings
        game_params: An object (like argparse.Namespace) containing run settings
                     (seed, player, max_steps, print_every, save_replay, replay_dir).

    Returns:
        A dictionary summarizing the game (game_id, phase, score, level, awareness, steps).
    """
    seed = getattr(game_params, "seed", None)
    game_id = getattr(game_params, "game_id", None) or str(uuid.uuid4())
    print_every = getattr(game_params, "print_every", 0) or 0

    # Game and player draw from separate streams so the autopilot cannot
    # shift the game's random sequence
    session = GameSession(config=config, rng=SystemRandomSource(seed))
    player_seed = None if seed is None else seed + 1
    player = get_player(getattr(game_params, "player", None), rng=SystemRandomSource(player_seed))
    recorder = ReplayRecorder(game_id, config, seed=seed)

    def on_step(state: GameState) -> None:
        if print_every and state.step % print_every == 0:
            print(f"\nStep {state.step} | {state.phase} | score {state.score} | "
                  f"level {state.level} | awareness {state.awareness_percent:.0f}%")
            print(state.print_board())
            print(state.message)

    loop = GameLoop(session, player=player, clock=SimulatedClock(), recorder=recorder, on_step=on_step)
    loop.start()
    final = loop.run(max_steps=getattr(game_params, "max_steps", None))

    print(f"\nGame {game_id} finished: {final.message}")

    replay_path: Optional[str] = None
    if getattr(game_params, "save_replay", False):
        try:
            replay_path = str(save_replay(recorder, getattr(game_params, "replay_dir", None)))
        except OSError as e:
            logger.error(f"Could not save replay for game {game_id}: {e}")

    return {
        "game_id": game_id,
        "phase": final.phase,
        "score": final.score,
        "level": final.level,
        "awareness": final.awareness,
        "steps": final.step,
        "message": final.message,
        "replay_path": replay_path,
    }


# -------------------------------
# Main Entry Point
# -------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a headless game of Self-Aware Snake with an autopilot."
    )
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in cells (default from SNAKE_WIDTH or 30)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in cells (default from SNAKE_HEIGHT or 20)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the game's random source")
    parser.add_argument("--player", type=str, default="greedy", choices=AVAILABLE_VARIANTS,
                        help="Autopilot variant")
    parser.add_argument("--max-steps", dest="max_steps", type=int, default=5000,
                        help="Stop after this many simulation steps")
    parser.add_argument("--print-every", dest="print_every", type=int, default=0,
                        help="Print the board every N steps (0 disables)")
    parser.add_argument("--save-replay", dest="save_replay", action="store_true",
                        help="Write the replay JSON to the replay directory")
    parser.add_argument("--replay-dir", dest="replay_dir", type=str, default=None,
                        help="Replay directory (default from SNAKE_REPLAY_DIR or completed_games)")
    parser.add_argument("--log-level", dest="log_level", type=str, default=None,
                        help="Logging level (default from LOG_LEVEL or INFO)")
    return parser


def main(argv=None) -> Dict[str, Any]:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_world_config(width=args.width, height=args.height)
    except ValueError as e:
        parser.error(str(e))

    result = run_simulation(config, args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
