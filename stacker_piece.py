
"""Piece catalog, piece model, rotation"""
from dataclasses import dataclass, replace
from typing import List, Tuple

Shape = List[List[int]]
Color = Tuple[int, int, int]

KINDS = ("I", "J", "L", "O", "S", "T", "Z")

# Templates are tuples: a piece always works on its own list copy.
SHAPES = {
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
    "O": ((1,1),(1,1)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
}

COLORS = {
    "I": (34,211,238),
    "J": (37,99,235),
    "L": (249,115,22),
    "O": (250,204,21),
    "S": (34,197,94),
    "T": (168,85,247),
    "Z": (239,68,68),
}


def shape_of(t: str) -> Shape:
    return [list(r) for r in SHAPES[t]]


def color_of(t: str) -> Color:
    return COLORS[t]


def rotate_cw(m): return [list(r)[::-1] for r in zip(*m)]
def rotate_ccw(m): return [list(r) for r in zip(*m)][::-1]


def rotate(shape: Shape, clockwise: bool = True) -> Shape:
    """Transpose, then mirror rows (cw) or flip row order (ccw)."""
    return rotate_cw(shape) if clockwise else rotate_ccw(shape)


def spawn_x(width: int, shape: Shape) -> int:
    return width // 2 - len(shape[0]) // 2


@dataclass(frozen=True)
class Piece:
    t: str
    shape: Shape
    x: int
    y: int

    @property
    def color(self) -> Color:
        return COLORS[self.t]

    @staticmethod
    def spawn(t: str, width: int) -> "Piece":
        s = shape_of(t)
        return Piece(t, s, spawn_x(width, s), 0)

    def respawned(self, width: int) -> "Piece":
        return replace(self, x=spawn_x(width, self.shape), y=0)

    def shifted(self, dx: int = 0, dy: int = 0) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def cells(self):
        for r, row in enumerate(self.shape):
            for c, v in enumerate(row):
                if v:
                    yield self.x + c, self.y + r
