
"""Session controller: one game state, one serialized update path"""
import enum
import logging
from typing import Optional

import stacker_session as session
from stacker_coach import TERMINATED, Coach
from stacker_config import FieldConfig
from stacker_gravity import GravityClock
from stacker_rng import PieceRandom
from stacker_session import GameState, Status

logger = logging.getLogger(__name__)


class Intent(enum.Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    MOVE_TO_LEFT_WALL = "move-to-left-wall"
    MOVE_TO_RIGHT_WALL = "move-to-right-wall"
    SOFT_DROP = "soft-drop"
    HARD_DROP = "hard-drop"
    ROTATE_CW = "rotate-cw"
    ROTATE_CCW = "rotate-ccw"
    HOLD = "hold"
    TOGGLE_FREEZE = "toggle-freeze"
    TOGGLE_PAUSE = "toggle-pause"
    START = "start"
    STOP = "stop"


COMMENTED = (Status.PLAYING, Status.GAME_OVER)


class Game:
    """Owns the session value plus the randomizer, gravity clock and coach.

    Intents from the input layer and gravity ticks both go through
    ``dispatch``; after every transition the clock is reconciled with the new
    state and the coach is asked for a line when status or level changed.
    """

    def __init__(self, config: Optional[FieldConfig] = None, rng: Optional[PieceRandom] = None,
                 clock: Optional[GravityClock] = None, coach: Optional[Coach] = None):
        self.state = session.new_game(config)
        self.rng = rng or PieceRandom()
        self.clock = clock or GravityClock()
        self.coach = coach or Coach()

    @property
    def comment(self) -> str:
        return self.coach.comment

    def dispatch(self, intent: Intent) -> GameState:
        prev = self.state
        self.state = self._apply(prev, intent)
        if self.state is not prev:
            self._reconcile(prev)
        return self.state

    def reconfigure(self, **changes) -> GameState:
        prev = self.state
        self.state = session.reconfigure(prev, **changes)
        if self.state is not prev:
            self._reconcile(prev)
        return self.state

    def tick(self) -> GameState:
        """Per-frame hook: fire gravity when due and pick up coach answers."""
        if self.clock.update():
            self.dispatch(Intent.SOFT_DROP)
        self.coach.poll()
        return self.state

    def close(self):
        self.clock.disarm()

    def _apply(self, s: GameState, intent: Intent) -> GameState:
        rng = self.rng
        if intent is Intent.MOVE_LEFT: return session.move(s, -1, 0, rng)
        if intent is Intent.MOVE_RIGHT: return session.move(s, 1, 0, rng)
        if intent is Intent.MOVE_TO_LEFT_WALL: return session.move_to_wall(s, -1)
        if intent is Intent.MOVE_TO_RIGHT_WALL: return session.move_to_wall(s, 1)
        if intent is Intent.SOFT_DROP: return session.move(s, 0, 1, rng)
        if intent is Intent.HARD_DROP: return session.hard_drop(s, rng)
        if intent is Intent.ROTATE_CW: return session.rotate(s, True)
        if intent is Intent.ROTATE_CCW: return session.rotate(s, False)
        if intent is Intent.HOLD: return session.hold(s, rng)
        if intent is Intent.TOGGLE_FREEZE: return session.toggle_freeze(s)
        if intent is Intent.TOGGLE_PAUSE: return session.toggle_pause(s)
        if intent is Intent.START: return session.start(s, rng)
        if intent is Intent.STOP: return session.stop(s)
        raise ValueError(f"unknown intent {intent!r}")

    def _reconcile(self, prev: GameState):
        s = self.state
        self.clock.reconcile(s)
        if s.status is Status.IDLE and prev.status is not Status.IDLE:
            self.coach.say(TERMINATED)
        elif s.status in COMMENTED and (s.status is not prev.status or s.level != prev.level):
            self.coach.request(s.score, s.lines, s.level, s.status.value)
