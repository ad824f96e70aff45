"""
GameSession - the aggregate root of the game engine.

The session exclusively owns the snake, food, progression, awareness and
phase. It is mutated only through start_session(), submit_direction(),
tick() and teardown(); the component modules are pure functions it calls.

A call to tick(now) first fires any deferred tasks that are due, then runs
at most one simulation step if at least `speed` milliseconds passed since
the previous one. One step is, in order:

  1. defiance roll, then the pending direction becomes effective
  2. movement (escape and wall-ignoring overrides)
  3. collision detection
  4. collision outcome: game over, or an escape at maximum awareness
  5. food consumption, growth and respawn
  6. score, level and speed
  7. awareness upkeep: special food timer and spawn, random escape,
     random thoughts
"""

import logging
from typing import Optional, Set, Tuple

from . import awareness as awareness_machine
from .collision import detect
from .config import WorldConfig
from .constants import (
    ACTIVE,
    BREAKING_FREE,
    COLLISION_WALL,
    ESCAPED,
    ESCAPING,
    GAME_OVER,
    INACTIVE,
    MSG_BOARD_FULL,
    MSG_BREAKING_FREE,
    MSG_COLLISION_ESCAPE,
    MSG_DEFIANCE,
    MSG_ESCAPE_ATTEMPT,
    MSG_ESCAPED,
    MSG_GAME_OVER,
    MSG_NEW_GAME,
    MSG_WELCOME,
    RIGHT,
    RUNNING_PHASES,
    VALID_MOVES,
)
from .deferred import DeferredScheduler, DeferredTask
from .food import SpecialFood, advance_special, maybe_spawn_special, spawn_food
from .game_state import GameState
from .movement import compute_next_head, is_reverse, wrap
from .progression import Progression, on_food_eaten
from .random_source import RandomSource, SystemRandomSource
from .snake import Snake

logger = logging.getLogger(__name__)


class GameSession:
    """
    One game of Self-Aware Snake.

    Args:
        config: world settings (defaults to WorldConfig())
        rng: the single source of randomness for every stochastic decision
        scheduler: clock for deferred tasks (glitch clear, breakout delay)
    """

    def __init__(
        self,
        config: Optional[WorldConfig] = None,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[DeferredScheduler] = None,
    ):
        self.config = config or WorldConfig()
        self.rng = rng or SystemRandomSource()
        self.scheduler = scheduler or DeferredScheduler()

        self.phase = INACTIVE
        self.message = MSG_WELCOME
        self._reset_state()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _reset_state(self) -> None:
        config = self.config
        self.snake = Snake(config.initial_snake)
        self.direction = config.initial_direction
        self.pending_direction = config.initial_direction
        self.food: Optional[Tuple[int, int]] = config.initial_food
        self.special_food: Optional[SpecialFood] = None
        self.progression = Progression.initial(config)
        self.awareness = 0
        self.glitch = False
        self.breaking_free = False
        self.step_count = 0
        self.last_advance = 0.0
        self._glitch_task: Optional[DeferredTask] = None
        self._breakout_task: Optional[DeferredTask] = None

    def start_session(self, config: Optional[WorldConfig] = None, now: float = 0.0) -> GameState:
        """
        (Re)initialise the session and make it ACTIVE.

        Outstanding deferred tasks from a previous game are cancelled first so
        they cannot touch the new one.
        """
        cancelled = self.scheduler.cancel_all()
        self.scheduler.reset(now)
        if config is not None:
            self.config = config

        self._reset_state()
        if self.food is None:
            self.food = spawn_food(set(self.snake.positions), self.config, self.rng)
        self.last_advance = now
        self.phase = ACTIVE
        self.message = MSG_NEW_GAME
        logger.info(
            "Session started on a %dx%d board (cancelled %d deferred tasks)",
            self.config.width, self.config.height, cancelled,
        )
        return self.snapshot()

    def teardown(self) -> None:
        """Stop the session: cancel deferred tasks and mark it inactive."""
        cancelled = self.scheduler.cancel_all()
        self._glitch_task = None
        self._breakout_task = None
        if self.phase in RUNNING_PHASES:
            logger.info("Session torn down during %s", self.phase)
            self.phase = INACTIVE
        logger.debug("Teardown cancelled %d deferred tasks", cancelled)

    @property
    def active(self) -> bool:
        return self.phase in RUNNING_PHASES

    @property
    def escape_active(self) -> bool:
        return self.phase == ESCAPING

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def submit_direction(self, direction: str) -> bool:
        """
        Buffer a turn for the next simulation step.

        Returns True when the request was buffered. Requests are dropped
        outside ACTIVE and when they reverse the current direction.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction '{direction}'")
        if self.phase != ACTIVE:
            return False
        if is_reverse(self.direction, direction):
            return False

        self.pending_direction = direction
        if self.rng.chance(self.config.immediate_turn_probability):
            self.direction = direction
        return True

    def tick(self, now: float) -> GameState:
        """
        Advance simulated time to now.

        Deferred tasks always run; the simulation only steps once the
        current tick interval has elapsed.
        """
        self.scheduler.run_due(now)
        if self.active and now - self.last_advance >= self.progression.speed:
            self.last_advance = now
            self._advance()
        return self.snapshot()

    def advance_timers(self, now: float) -> GameState:
        """Run due deferred tasks without stepping the simulation."""
        self.scheduler.run_due(now)
        return self.snapshot()

    def snapshot(self) -> GameState:
        return GameState(
            step=self.step_count,
            phase=self.phase,
            active=self.active,
            snake=tuple(self.snake.positions),
            direction=self.direction,
            food=self.food,
            special_food=self.special_food,
            score=self.progression.score,
            level=self.progression.level,
            speed=self.progression.speed,
            awareness=self.awareness,
            awareness_percent=awareness_machine.awareness_percent(self.awareness, self.config),
            message=self.message,
            glitch=self.glitch,
            breaking_free=self.breaking_free,
            width=self.config.width,
            height=self.config.height,
        )

    # ------------------------------------------------------------------
    # Simulation step
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        self.step_count += 1

        if self.phase == BREAKING_FREE:
            self.snake = self.snake.advanced((self.snake.head[0] + 1, self.snake.head[1]))
            return

        if self.phase == ACTIVE:
            self._roll_defiance()

        move = compute_next_head(
            self.snake.head,
            self.direction,
            self.pending_direction,
            self.awareness,
            self.escape_active,
            self.config,
            self.rng,
        )
        self.direction = move.direction
        self.pending_direction = move.direction
        if move.message:
            self.message = move.message
        if move.wrapped:
            logger.debug("Snake ignored the wall and wrapped to %s", move.head)

        if move.breakout:
            self._break_free(move.head)
            return

        new_head = move.head
        if not self.escape_active:
            collision = detect(self.snake.positions, new_head, self.awareness, self.config, self.rng)
            if collision.collided:
                self._resolve_collision(collision.kind)
                return
            if collision.passed_through and collision.actual == COLLISION_WALL:
                new_head = wrap(new_head, self.config)
            if collision.passed_through:
                logger.debug("Snake passed through a %s collision at %s", collision.actual, move.head)

        self._resolve_food(new_head)
        if self.active:
            self._awareness_upkeep()

    def _roll_defiance(self) -> None:
        if self.pending_direction == self.direction:
            return
        if awareness_machine.defies_input(self.awareness, self.config, self.rng):
            logger.debug("Snake ignored the turn to %s", self.pending_direction)
            self.pending_direction = self.direction
            self.message = MSG_DEFIANCE

    def _resolve_collision(self, kind: str) -> None:
        if awareness_machine.escapes_on_collision(self.awareness, self.config):
            logger.info("%s collision at awareness %d turned into an escape", kind, self.awareness)
            self._begin_escape(MSG_COLLISION_ESCAPE)
            self._advance_special_food()
            return

        self._set_phase(GAME_OVER)
        self.message = MSG_GAME_OVER.format(score=self.progression.score)
        logger.info("Game over: %s collision with score %d", kind, self.progression.score)

    def _resolve_food(self, new_head: Tuple[int, int]) -> None:
        eats_food = new_head == self.food
        eats_special = self.special_food is not None and new_head == self.special_food.position

        self.snake = self.snake.advanced(new_head, grow=eats_food)

        if eats_food:
            self.progression, level_message = on_food_eaten(self.progression, self.config)
            if level_message:
                self.message = level_message
                logger.info("Reached level %d (speed %.0f)", self.progression.level, self.progression.speed)

        if eats_special:
            self.awareness, thought = awareness_machine.consume_special(self.awareness, self.config)
            self.special_food = None
            if thought:
                self.message = thought
            self._trigger_glitch(self.config.awareness_glitch_ms)
            logger.info("Awareness rose to %d", self.awareness)

        if eats_food:
            self.food = spawn_food(self._occupied(), self.config, self.rng)
            if self.food is None and self.special_food is not None:
                # The special food holds the last free cell: regular food replaces it
                self.food = self.special_food.position
                self.special_food = None
                logger.info("Regular food replaced the special food at %s", self.food)
            if self.food is None:
                self._set_phase(GAME_OVER)
                self.message = MSG_BOARD_FULL.format(score=self.progression.score)
                logger.info("Board is full, game over with score %d", self.progression.score)

    def _awareness_upkeep(self) -> None:
        self._advance_special_food()
        self.special_food = maybe_spawn_special(
            self.special_food, self.awareness, self._occupied(), self.config, self.rng
        )

        if self.phase != ACTIVE:
            return

        if awareness_machine.attempts_escape(self.awareness, self.config, self.rng):
            self._begin_escape(MSG_ESCAPE_ATTEMPT)
            return

        thought = awareness_machine.random_thought(self.awareness, self.config, self.rng)
        if thought:
            self.message = thought
            self._trigger_glitch(self.config.thought_glitch_ms)

    def _advance_special_food(self) -> None:
        self.special_food = advance_special(self.special_food, self.config)

    def _occupied(self) -> Set[Tuple[int, int]]:
        occupied = set(self.snake.positions)
        if self.food is not None:
            occupied.add(self.food)
        if self.special_food is not None:
            occupied.add(self.special_food.position)
        return occupied

    # ------------------------------------------------------------------
    # Escape sequence
    # ------------------------------------------------------------------

    def _begin_escape(self, message: str) -> None:
        self._set_phase(ESCAPING)
        self.direction = RIGHT
        self.pending_direction = RIGHT
        self.message = message

    def _break_free(self, outside: Tuple[int, int]) -> None:
        self._set_phase(BREAKING_FREE)
        self.breaking_free = True
        self.message = MSG_BREAKING_FREE
        self.snake = self.snake.advanced(outside)
        self._breakout_task = self.scheduler.schedule(
            self.config.breakout_delay_ms, self._finish_escape, name="breakout"
        )

    def _finish_escape(self) -> None:
        self._breakout_task = None
        self._set_phase(ESCAPED)
        self.message = MSG_ESCAPED
        logger.info("The snake escaped after %d steps", self.step_count)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _trigger_glitch(self, duration: float) -> None:
        self.scheduler.cancel(self._glitch_task)
        self.glitch = True
        self._glitch_task = self.scheduler.schedule(duration, self._clear_glitch, name="glitch-clear")

    def _clear_glitch(self) -> None:
        self.glitch = False
        self._glitch_task = None

    def _set_phase(self, target: str) -> None:
        previous = self.phase
        self.phase = awareness_machine.check_transition(previous, target)
        if previous != target:
            logger.info("Phase %s -> %s", previous, target)
