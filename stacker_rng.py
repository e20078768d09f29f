
"""Bag-less piece randomizer"""
import random
from typing import Optional

from stacker_piece import KINDS, Piece


class PieceRandom:
    """Independent uniform draws over the seven kinds.

    There is no bag and no repeat rejection, so streaks of one kind are
    possible. ``seed`` only exists so tests can pin the sequence.
    """

    PIECES = KINDS

    def __init__(self, seed: Optional[int] = None):
        self.random = random.Random(seed)

    def next_kind(self) -> str:
        return self.random.choice(self.PIECES)

    def next_piece(self, width: int) -> Piece:
        return Piece.spawn(self.next_kind(), width)
