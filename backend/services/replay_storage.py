"""
Local storage for game replay files.

Replays are organized by game ID: <replay_dir>/<game_id>/replay.json, so
later artefacts for the same game can sit next to them.
"""

import json
import logging
import os
import time
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from domain.config import WorldConfig
from domain.game_state import GameState

logger = logging.getLogger(__name__)

DEFAULT_REPLAY_DIR = "completed_games"


def get_replay_dir() -> str:
    d = os.getenv("SNAKE_REPLAY_DIR", DEFAULT_REPLAY_DIR).strip()
    return d or DEFAULT_REPLAY_DIR


class ReplayRecorder:
    """
    Collects one snapshot per simulation step for a single game.
    """

    def __init__(self, game_id: str, config: WorldConfig, seed: Optional[int] = None):
        self.game_id = game_id
        self.config = config
        self.seed = seed
        self.start_time = time.time()
        self.frames: List[GameState] = []

    def record(self, state: GameState) -> None:
        # Only keep one frame per step; deferred effects may change a frame in place
        if self.frames and self.frames[-1].step == state.step:
            self.frames[-1] = state
        else:
            self.frames.append(state)

    def serialize(self) -> Dict[str, Any]:
        """
        Convert the recorded frames to a JSON-serializable dict.
        """
        final = self.frames[-1] if self.frames else None
        config = asdict(self.config)
        config["thoughts"] = list(self.config.thoughts)

        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "seed": self.seed,
            "steps": final.step if final else 0,
            "final_phase": final.phase if final else None,
            "final_score": final.score if final else 0,
            "final_level": final.level if final else 1,
            "final_awareness": final.awareness if final else 0,
            "final_message": final.message if final else None,
            "config": config,
        }
        return {
            "metadata": metadata,
            "frames": [frame.to_dict() for frame in self.frames],
        }


def save_replay(recorder: ReplayRecorder, replay_dir: Optional[str] = None) -> Path:
    """
    Write the replay JSON to disk.

    Args:
        recorder: the recorder holding the game's frames
        replay_dir: base directory (defaults to SNAKE_REPLAY_DIR or completed_games)

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    base = Path(replay_dir or get_replay_dir())
    path = base / recorder.game_id / "replay.json"
    data = recorder.serialize()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.error(f"Failed to write replay for game {recorder.game_id}: {e}")
        raise

    logger.info(f"Saved replay for game {recorder.game_id} to {path}")
    return path


def load_replay(path: Path) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
