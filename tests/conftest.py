import pytest

from stacker_board import empty_board
from stacker_config import FieldConfig
from stacker_piece import Piece
from stacker_rng import PieceRandom
from stacker_session import GameState, Status


class FakeTime:
    """Stand-in for pygame.time.get_ticks."""

    def __init__(self, t=0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture
def rng():
    return PieceRandom(seed=7)


@pytest.fixture
def fake_time():
    return FakeTime(1000)


@pytest.fixture
def board():
    """Build a board from strings, top row first: '.' empty, any letter a block."""
    def build(*rows, width=10, height=20):
        b = empty_board(width, height)
        top = height - len(rows)
        for y, text in enumerate(rows):
            for x, ch in enumerate(text):
                if ch != ".":
                    b[top + y][x] = ch
        return b
    return build


@pytest.fixture
def playing():
    """A PLAYING state with chosen pieces on a chosen grid."""
    def build(current="O", nxt="T", grid=None, width=10, height=20, **kw):
        cfg = FieldConfig(width, height)
        cur = current if isinstance(current, Piece) else Piece.spawn(current, width)
        return GameState(
            config=cfg,
            grid=grid if grid is not None else empty_board(width, height),
            current=cur,
            next=Piece.spawn(nxt, width),
            status=Status.PLAYING,
            **kw,
        )
    return build
