"""
Frame loop driving a game session.

Plays the part of the browser's animation-frame scheduler: every frame it
feeds the player's intent into the session and calls tick(now). The session
decides on its own whether a simulation step is due.
"""

import logging
import time
from typing import Callable, Optional

from domain.game_state import GameState
from domain.session import GameSession
from players.base import Player
from services.replay_storage import ReplayRecorder

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 1000.0 / 60


class SimulatedClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def sleep(self, ms: float) -> None:
        self.current += ms


class WallClock:
    """Real time in milliseconds."""

    def __init__(self):
        self._origin = time.monotonic()

    def now(self) -> float:
        return (time.monotonic() - self._origin) * 1000.0

    def sleep(self, ms: float) -> None:
        time.sleep(ms / 1000.0)


class GameLoop:
    """
    Runs frames until the session ends or the loop is stopped.

    Args:
        session: the session to drive (start_session() is called by start())
        player: optional input collector asked once per simulation step
        clock: object with now() and sleep(ms); defaults to a SimulatedClock
        recorder: optional ReplayRecorder receiving each new snapshot
        on_step: optional callback invoked with each new snapshot
    """

    def __init__(
        self,
        session: GameSession,
        player: Optional[Player] = None,
        clock=None,
        recorder: Optional[ReplayRecorder] = None,
        on_step: Optional[Callable[[GameState], None]] = None,
        frame_interval: float = FRAME_INTERVAL_MS,
    ):
        self.session = session
        self.player = player
        self.clock = clock or SimulatedClock()
        self.recorder = recorder
        self.on_step = on_step
        self.frame_interval = frame_interval
        self.frames = 0
        self.next_frame_at: Optional[float] = None
        self._stopped = False
        self._asked_step = -1
        self._last_state: Optional[GameState] = None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self) -> GameState:
        state = self.session.start_session(now=self.clock.now())
        self._stopped = False
        self._asked_step = -1
        self._publish(state)
        self.next_frame_at = self.clock.now() + self.frame_interval
        return state

    def run_frame(self) -> GameState:
        """Run a single frame at the clock's current time."""
        now = self.clock.now()
        state = self.session.snapshot()

        if self.player is not None and state.step != self._asked_step:
            self._asked_step = state.step
            move = self.player.get_move(state)
            if move is not None:
                self.session.submit_direction(move)

        state = self.session.tick(now)
        self.frames += 1
        if state != self._last_state:
            self._publish(state)
        self.next_frame_at = now + self.frame_interval
        return state

    def run(self, max_steps: Optional[int] = None, max_frames: Optional[int] = None) -> GameState:
        """
        Run frames until the session is no longer active.

        max_steps / max_frames bound the run; hitting either stops the loop.
        """
        state = self.session.snapshot()
        while not self._stopped and self.session.active:
            if max_steps is not None and state.step >= max_steps:
                logger.info("Step limit %d reached", max_steps)
                self.stop()
                break
            if max_frames is not None and self.frames >= max_frames:
                logger.info("Frame limit %d reached", max_frames)
                self.stop()
                break

            wait = self.next_frame_at - self.clock.now() if self.next_frame_at is not None else 0
            if wait > 0:
                self.clock.sleep(wait)
            state = self.run_frame()

        return self.session.snapshot()

    def stop(self) -> None:
        """Cancel the pending frame and tear the session down."""
        if self._stopped:
            return
        self._stopped = True
        self.next_frame_at = None
        self.session.teardown()
        logger.debug("Game loop stopped after %d frames", self.frames)

    def _publish(self, state: GameState) -> None:
        self._last_state = state
        if self.recorder is not None:
            self.recorder.record(state)
        if self.on_step is not None:
            self.on_step(state)
