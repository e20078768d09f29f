
"""Gravity clock: periodic soft drop while a session is live"""
from typing import Callable, Optional

from pygame.time import get_ticks

from stacker_session import GameState, Status

MIN_INTERVAL_MS = 50
SPEEDUP = 0.9


def gravity_interval(level: int, base_speed: int) -> float:
    return max(MIN_INTERVAL_MS, base_speed * SPEEDUP ** (level - 1))


def desired_interval(state: GameState) -> Optional[float]:
    if state.status is not Status.PLAYING or state.frozen:
        return None
    return gravity_interval(state.level, state.config.base_speed)


class GravityClock:
    def __init__(self, now: Callable[[], int] = get_ticks):
        self.now = now
        self.interval: Optional[float] = None
        self.start_time = 0
        self.inputs = None

    @property
    def armed(self) -> bool:
        return self.interval is not None

    def arm(self, interval: float):
        self.interval = interval
        self.start_time = self.now()

    def disarm(self):
        self.interval = None
        self.start_time = 0
        self.inputs = None

    def reconcile(self, state: GameState):
        """Bring the timer in line with what the state calls for."""
        want = desired_interval(state)
        if want is None:
            if self.armed:
                self.disarm()
            return
        # moves leave these alone, so they keep the phase
        inputs = (state.status, state.level, state.config.base_speed, state.frozen)
        if not self.armed or inputs != self.inputs:
            self.arm(want)
            self.inputs = inputs

    def update(self) -> bool:
        """True when a tick is due; the next period starts from now."""
        if not self.armed:
            return False
        t = self.now()
        if t - self.start_time >= self.interval:
            self.start_time = t
            return True
        return False
