
"""Game session state and its transitions.

Every transition is a plain function taking the current ``GameState`` (and
the piece randomizer where new pieces may be needed) and returning the next
one.  When an intent does not apply to the current state (wrong status, piece
frozen, blocked by the stack) the very same object is returned, so callers can
detect a no-op with ``is``.
"""
import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from stacker_board import (Board, collide, drop_distance, empty_board, merge,
                           resolve, wall_distance)
from stacker_config import FieldConfig, clamp
from stacker_piece import Piece, rotate as rotate_shape
from stacker_rng import PieceRandom

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class GameState:
    config: FieldConfig = field(default_factory=FieldConfig)
    grid: Optional[Board] = None
    current: Optional[Piece] = None
    next: Optional[Piece] = None
    held: Optional[Piece] = None
    can_hold: bool = True
    frozen: bool = False
    score: int = 0
    lines: int = 0
    level: int = 1
    status: Status = Status.IDLE

    def __post_init__(self):
        if self.grid is None:
            object.__setattr__(self, "grid", empty_board(self.config.width, self.config.height))

    @property
    def playing(self) -> bool:
        return self.status is Status.PLAYING and self.current is not None


def new_game(config: Optional[FieldConfig] = None) -> GameState:
    return GameState(config=(config or FieldConfig()).clamped())


def start(state: GameState, rng: PieceRandom) -> GameState:
    if state.status not in (Status.IDLE, Status.GAME_OVER):
        return state
    cfg = state.config
    current = rng.next_piece(cfg.width)
    nxt = rng.next_piece(cfg.width)
    logger.info("session started %dx%d speed=%dms", cfg.width, cfg.height, cfg.base_speed)
    return GameState(config=cfg, current=current, next=nxt, status=Status.PLAYING)


def stop(state: GameState) -> GameState:
    if state.status is Status.IDLE:
        return state
    logger.info("session stopped at score=%d lines=%d", state.score, state.lines)
    return replace(
        state, current=None, held=None, can_hold=True, frozen=False,
        score=0, lines=0, level=1, status=Status.IDLE,
    )


def reconfigure(state: GameState, width=None, height=None, base_speed=None) -> GameState:
    """Change field settings while idle; values are clamped to their limits."""
    if state.status is not Status.IDLE:
        return state
    old = state.config
    cfg = FieldConfig(
        old.width if width is None else clamp("width", width),
        old.height if height is None else clamp("height", height),
        old.base_speed if base_speed is None else clamp("base_speed", base_speed),
    )
    if cfg == old:
        return state
    logger.debug("reconfigured %s -> %s", old, cfg)
    grid = state.grid
    if (cfg.width, cfg.height) != (old.width, old.height):
        grid = empty_board(cfg.width, cfg.height)
    return replace(state, config=cfg, grid=grid)


def lock(state: GameState, rng: PieceRandom) -> GameState:
    """Stamp the active piece, clear rows, then spawn the queued piece."""
    if state.current is None:
        return state
    res = resolve(merge(state.grid, state.current), state.score, state.lines, state.level)
    if res.cleared:
        logger.debug("cleared %d row(s) for %d points", res.cleared, res.score_delta)
    if res.level != state.level:
        logger.info("level up: %d", res.level)

    spawned = state.next.respawned(state.config.width)
    if collide(res.board, spawned):
        logger.info("game over: score=%d lines=%d level=%d", res.score, res.lines, res.level)
        return replace(
            state, grid=res.board, current=None, frozen=False,
            score=res.score, lines=res.lines, level=res.level, status=Status.GAME_OVER,
        )
    return replace(
        state, grid=res.board, current=spawned, next=rng.next_piece(state.config.width),
        can_hold=True, frozen=False, score=res.score, lines=res.lines, level=res.level,
    )


def move(state: GameState, dx: int, dy: int, rng: PieceRandom) -> GameState:
    if not state.playing:
        return state
    if state.frozen and dy != 0:
        return state
    if not collide(state.grid, state.current, dx, dy):
        return replace(state, current=state.current.shifted(dx, dy))
    if dy > 0:
        return lock(state, rng)
    return state


def hard_drop(state: GameState, rng: PieceRandom) -> GameState:
    if not state.playing:
        return state
    d = drop_distance(state.grid, state.current)
    return lock(replace(state, current=state.current.shifted(0, d)), rng)


def move_to_wall(state: GameState, direction: int) -> GameState:
    if not state.playing or state.frozen:
        return state
    d = wall_distance(state.grid, state.current, direction)
    if d == 0:
        return state
    return replace(state, current=state.current.shifted(d, 0))


def rotate(state: GameState, clockwise: bool = True) -> GameState:
    if not state.playing or state.frozen:
        return state
    shape = rotate_shape(state.current.shape, clockwise)
    if collide(state.grid, state.current, 0, 0, shape):
        return state
    return replace(state, current=replace(state.current, shape=shape))


def hold(state: GameState, rng: PieceRandom) -> GameState:
    """Swap the active kind into the hold slot, once per locked piece."""
    if not state.playing or not state.can_hold:
        return state
    width = state.config.width
    stashed = Piece.spawn(state.current.t, width)
    if state.held is not None:
        incoming, nxt = Piece.spawn(state.held.t, width), state.next
    else:
        incoming, nxt = state.next.respawned(width), None
    if collide(state.grid, incoming):
        return state
    if nxt is None:
        nxt = rng.next_piece(width)
    return replace(state, current=incoming, next=nxt, held=stashed, can_hold=False)


def toggle_freeze(state: GameState) -> GameState:
    if state.status is not Status.PLAYING:
        return state
    return replace(state, frozen=not state.frozen)


def toggle_pause(state: GameState) -> GameState:
    if state.status is Status.PLAYING:
        return replace(state, status=Status.PAUSED)
    if state.status is Status.PAUSED:
        return replace(state, status=Status.PLAYING)
    return state
