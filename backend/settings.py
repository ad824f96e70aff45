"""
Environment-driven settings for the entry points.

The game core never reads the environment; the CLI and the API build their
WorldConfig here. Any numeric WorldConfig field can be overridden with a
SNAKE_<FIELD> variable, e.g. SNAKE_WIDTH=40 or SNAKE_ESCAPE_PROBABILITY=0.05.
A .env file next to the process is loaded first.
"""

import logging
import os
from dataclasses import fields
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from domain.config import WorldConfig

load_dotenv()

ENV_PREFIX = "SNAKE_"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Fields that are not plain numbers and stay code-only
_NON_NUMERIC_FIELDS = {"initial_snake", "initial_direction", "initial_food", "thoughts"}


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Clean up env-provided strings that may include surrounding quotes or whitespace.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and (
        (cleaned[0] == '"' and cleaned[-1] == '"') or (cleaned[0] == "'" and cleaned[-1] == "'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _coerce(name: str, raw: str, default: Any) -> Any:
    try:
        if isinstance(default, int) and not isinstance(default, bool):
            return int(raw)
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a number, got '{raw}'")


def config_overrides(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect WorldConfig overrides from SNAKE_* variables."""
    env = os.environ if env is None else env
    defaults = WorldConfig()
    overrides: Dict[str, Any] = {}
    for f in fields(WorldConfig):
        if f.name in _NON_NUMERIC_FIELDS:
            continue
        raw = _sanitize_env_value(env.get(f"{ENV_PREFIX}{f.name.upper()}"))
        if raw:
            overrides[f.name] = _coerce(f.name, raw, getattr(defaults, f.name))
    return overrides


def load_world_config(env: Optional[Mapping[str, str]] = None, **extra: Any) -> WorldConfig:
    """
    Build the WorldConfig from the environment.

    Keyword arguments win over environment values. When the board size is
    overridden the starting snake and food are laid out for that board.

    Raises:
        ValueError: If a value is not a number or the resulting config is invalid
    """
    overrides = config_overrides(env)
    overrides.update({k: v for k, v in extra.items() if v is not None})
    if "width" in overrides or "height" in overrides:
        defaults = WorldConfig()
        width = overrides.pop("width", defaults.width)
        height = overrides.pop("height", defaults.height)
        return WorldConfig.for_board(width, height, **overrides)
    return WorldConfig(**overrides)


def get_log_level(env: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env
    return (_sanitize_env_value(env.get("LOG_LEVEL")) or "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=level or get_log_level(), format=LOG_FORMAT)
