
"""Board helpers: collide, merge, sweep, scoring, drop probes"""
from typing import List, NamedTuple, Optional

from stacker_piece import Piece, Shape

Board = List[List[Optional[str]]]

LINES_PER_LEVEL = 10
SCORE_TABLE = {1: 100, 2: 300, 3: 500, 4: 800}


class ClearResult(NamedTuple):
    board: Board
    cleared: int
    score_delta: int
    score: int
    lines: int
    level: int


def empty_board(width: int, height: int) -> Board:
    return [[None] * width for _ in range(height)]


def collide(board: Board, piece: Piece, dx: int = 0, dy: int = 0,
            shape: Optional[Shape] = None) -> bool:
    """True if the piece at (x+dx, y+dy) hits a wall, the floor or a block.

    Rows above the board only collide with the side walls.
    """
    rows, cols = len(board), len(board[0])
    s = piece.shape if shape is None else shape
    for y, row in enumerate(s):
        for x, v in enumerate(row):
            if not v: continue
            bx, by = piece.x + x + dx, piece.y + y + dy
            if bx < 0 or bx >= cols or by >= rows: return True
            if by >= 0 and board[by][bx]: return True
    return False


def merge(board: Board, piece: Piece) -> Board:
    """Return a copy of the board with the piece stamped in, clipped to the rows."""
    out = [row[:] for row in board]
    for bx, by in piece.cells():
        if 0 <= by < len(out):
            out[by][bx] = piece.t
    return out


def sweep(board: Board):
    """Drop full rows and pad the top with empty ones; returns (board, cleared)."""
    kept = [row[:] for row in board if not all(row)]
    cleared = len(board) - len(kept)
    cols = len(board[0])
    return [[None] * cols for _ in range(cleared)] + kept, cleared


def level_for(lines: int) -> int:
    return lines // LINES_PER_LEVEL + 1


def points(cleared: int, level: int) -> int:
    return SCORE_TABLE.get(cleared, 0) * level


def resolve(board: Board, score: int, lines: int, level: int) -> ClearResult:
    new_board, cleared = sweep(board)
    delta = points(cleared, level)
    total = lines + cleared
    return ClearResult(new_board, cleared, delta, score + delta, total, level_for(total))


def drop_distance(board: Board, piece: Piece) -> int:
    d = 0
    while not collide(board, piece, 0, d + 1):
        d += 1
    return d


def ghost_y(board: Board, piece: Piece) -> int:
    return piece.y + drop_distance(board, piece)


def wall_distance(board: Board, piece: Piece, direction: int) -> int:
    """Signed lateral offset to the furthest legal column in one direction."""
    step = 1 if direction > 0 else -1
    d = 0
    while not collide(board, piece, d + step, 0):
        d += step
    return d
