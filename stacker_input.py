
"""Device events to intents, plus DAS/ARR auto-shift and held soft drop"""
from typing import List, Optional

import pygame

from stacker_config import CONFIG
from stacker_game import Intent

KEYMAP = {
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_UP: Intent.ROTATE_CW,
    pygame.K_x: Intent.ROTATE_CW,
    pygame.K_z: Intent.ROTATE_CCW,
    pygame.K_SPACE: Intent.HARD_DROP,
    pygame.K_c: Intent.HOLD,
    pygame.K_f: Intent.TOGGLE_FREEZE,
    pygame.K_p: Intent.TOGGLE_PAUSE,
    pygame.K_RETURN: Intent.START,
    pygame.K_KP_ENTER: Intent.START,
    pygame.K_r: Intent.START,
    pygame.K_ESCAPE: Intent.STOP,
}

BUTTONMAP = {
    1: Intent.MOVE_LEFT,
    2: Intent.HARD_DROP,
    3: Intent.MOVE_RIGHT,
}


def intents_for(e) -> List[Intent]:
    """Map one pygame event to zero or more intents.

    Plain left/right presses are left to ShiftRepeat; Ctrl+left/right slides
    to the wall.
    """
    if e.type == pygame.KEYDOWN:
        if e.key in (pygame.K_LEFT, pygame.K_RIGHT):
            if e.mod & pygame.KMOD_CTRL:
                return [Intent.MOVE_TO_LEFT_WALL if e.key == pygame.K_LEFT else Intent.MOVE_TO_RIGHT_WALL]
            return []
        intent = KEYMAP.get(e.key)
        return [intent] if intent else []
    if e.type == pygame.MOUSEBUTTONDOWN:
        intent = BUTTONMAP.get(e.button)
        return [intent] if intent else []
    if e.type == pygame.MOUSEWHEEL and e.y:
        return [Intent.ROTATE_CW if e.y > 0 else Intent.ROTATE_CCW]
    return []


class ShiftRepeat:
    """Held left/right: one step on press, then one every ARR_MS once DAS_MS passed."""

    def __init__(self):
        self.reset(0)

    def reset(self, direction: int):
        self.dir = direction
        self.held_ms = 0
        self.since_step = 0
        self.stepped = False

    def update(self, dt, left: bool, right: bool) -> Optional[Intent]:
        nd = (-1 if left else 0) + (1 if right else 0)
        if nd != self.dir:
            self.reset(nd)
        if self.dir == 0:
            return None
        self.held_ms += dt
        if not self.stepped:
            self.stepped = True
            return self.step()
        if self.held_ms < CONFIG["DAS_MS"]:
            return None
        self.since_step += dt
        if CONFIG["ARR_MS"] == 0 or self.since_step >= CONFIG["ARR_MS"]:
            self.since_step = 0
            return self.step()
        return None

    def step(self) -> Intent:
        return Intent.MOVE_LEFT if self.dir < 0 else Intent.MOVE_RIGHT


class SoftDropRepeat:
    """Held down: the KEYDOWN gives the first drop, then one every SOFT_DROP_MS."""

    def __init__(self):
        self.since_step = 0

    def update(self, dt, held: bool) -> Optional[Intent]:
        if not held:
            self.since_step = 0
            return None
        self.since_step += dt
        if self.since_step >= CONFIG["SOFT_DROP_MS"]:
            self.since_step = 0
            return Intent.SOFT_DROP
        return None
