"""
Registry for autopilot player variants.

Maps variant keys (e.g., 'greedy', 'random') to player factories so the CLI
and the API can pick an autopilot by name. To add a variant, write the
player class and add an entry to PLAYER_VARIANT_LOADERS.
"""

from typing import Callable, Dict, Optional

from domain.random_source import RandomSource
from .base import Player


def _get_greedy_player(rng: Optional[RandomSource]) -> Player:
    from .random_player import RandomPlayer
    return RandomPlayer(rng=rng, greedy=True)


def _get_random_player(rng: Optional[RandomSource]) -> Player:
    from .random_player import RandomPlayer
    return RandomPlayer(rng=rng, greedy=False)


# Registry: maps variant key -> callable building the player
PLAYER_VARIANT_LOADERS: Dict[str, Callable[[Optional[RandomSource]], Player]] = {
    "greedy": _get_greedy_player,
    "random": _get_random_player,
}

# Canonical list of available variant keys (for API exposure)
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player(variant_key: Optional[str] = None, rng: Optional[RandomSource] = None) -> Player:
    """
    Build the player for a given variant key.

    Args:
        variant_key: One of 'greedy' or 'random'. If None or empty, returns greedy.
        rng: random source handed to the player

    Returns:
        A Player instance.

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = "greedy"

    variant_key = variant_key.strip()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key](rng)


def list_variants() -> list:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "greedy", "description": "Heads for the food along safe moves"},
        {"key": "random", "description": "Wanders randomly along safe moves"},
    ]
