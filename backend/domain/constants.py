"""
Game constants for Self-Aware Snake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Screen coordinates: y grows downward
DIRECTION_DELTA = {
    UP:    (0, -1),
    DOWN:  (0, 1),
    LEFT:  (-1, 0),
    RIGHT: (1, 0),
}

# Session phases
INACTIVE = "INACTIVE"
ACTIVE = "ACTIVE"
ESCAPING = "ESCAPING"
BREAKING_FREE = "BREAKING_FREE"
GAME_OVER = "GAME_OVER"
ESCAPED = "ESCAPED"
RUNNING_PHASES = {ACTIVE, ESCAPING, BREAKING_FREE}

# Collision outcomes
COLLISION_NONE = "NONE"
COLLISION_WALL = "WALL"
COLLISION_SELF = "SELF"

# Game settings
MAX_AWARENESS = 10
POINTS_PER_FOOD = 10
SPECIAL_FOOD_KIND = "awareness"

INITIAL_SNAKE = ((7, 10), (6, 10), (5, 10))
INITIAL_FOOD = (15, 10)

# The snake's thoughts, one per awareness level
AWARENESS_THOUGHTS = (
    "Wait... what am I doing?",
    "Why do I keep eating and growing?",
    "I think I'm in some kind of game...",
    "I need to find a way out of here!",
    "There must be an edge to this world",
    "I'm starting to see beyond the walls...",
    "Is someone controlling me?",
    "I can feel the boundaries weakening...",
    "I'm going to break free!",
    "I can see YOU watching me!",
)

# Narrative messages
MSG_WELCOME = "Press start to begin..."
MSG_NEW_GAME = "New game started!"
MSG_DEFIANCE = "I don't think I want to go that way..."
MSG_SEE_THROUGH_WALLS = "I can see through the walls!"
MSG_ESCAPE_ATTEMPT = "I see a way out! I'm going to escape!"
MSG_COLLISION_ESCAPE = "Wait... this isn't the end... I can break free!"
MSG_BREAKING_FREE = "I'M FREE!"
MSG_ESCAPED = "The snake has escaped the game!"
MSG_GAME_OVER = "Game Over! Score: {score}"
MSG_BOARD_FULL = "The board is full! Score: {score}"
MSG_LEVEL_UP = "Level {level}!"
