"""
Random player implementation - picks random safe moves.
"""

from typing import List, Optional

from domain.constants import ACTIVE, DIRECTION_DELTA, OPPOSITE, VALID_MOVES
from domain.game_state import GameState
from domain.random_source import RandomSource, SystemRandomSource
from .base import Player


class RandomPlayer(Player):
    """
    An autopilot that picks a direction avoiding walls and its own body.

    It heads for the food when a safe move gets closer to it, and otherwise
    wanders randomly among the safe moves.
    """

    name = "random"

    def __init__(self, rng: Optional[RandomSource] = None, greedy: bool = True):
        self.rng = rng or SystemRandomSource()
        self.greedy = greedy

    def safe_moves(self, game_state: GameState) -> List[str]:
        snake_positions = list(game_state.snake)
        head_x, head_y = snake_positions[0]

        # Filter out moves that:
        # 1. Reverse the current direction
        # 2. Hit walls
        # 3. Hit own body, tail included (collisions use the pre-move body)
        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            if move == OPPOSITE[game_state.direction]:
                continue
            dx, dy = DIRECTION_DELTA[move]
            new_x, new_y = head_x + dx, head_y + dy

            # Check wall collisions
            if (new_x < 0 or new_x >= game_state.width or
                    new_y < 0 or new_y >= game_state.height):
                continue

            # Check self collisions
            if (new_x, new_y) in snake_positions:
                continue

            valid_moves.append(move)
        return valid_moves

    def get_move(self, game_state: GameState) -> Optional[str]:
        if game_state.phase != ACTIVE:
            return None

        valid_moves = self.safe_moves(game_state)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return None

        if self.greedy and game_state.food is not None:
            head_x, head_y = game_state.head
            food_x, food_y = game_state.food

            def distance(move: str) -> int:
                dx, dy = DIRECTION_DELTA[move]
                return abs(head_x + dx - food_x) + abs(head_y + dy - food_y)

            best = min(distance(move) for move in valid_moves)
            valid_moves = [move for move in valid_moves if distance(move) == best]

        return valid_moves[self.rng.randrange(len(valid_moves))]
