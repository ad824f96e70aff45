"""
Player implementations for Self-Aware Snake.

This module contains the input-collector abstractions that feed
directional intents into a game session.
"""

from .base import Player
from .random_player import RandomPlayer
from .scripted_player import ScriptedPlayer
from .variant_registry import get_player, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'ScriptedPlayer',
    'get_player',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
