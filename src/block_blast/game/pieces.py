from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class PieceKind(IntEnum):
    I = 1
    O = 2
    Z = 3
    S = 4
    J = 5
    L = 6
    T = 7


class PieceColor(IntEnum):
    """Color identifiers stored in board cells (0 is reserved for empty)."""

    RED = 1
    TEAL = 2
    SKY = 3
    SAGE = 4
    YELLOW = 5
    PINK = 6
    BLUE = 7

    @property
    def hex(self) -> str:
        return COLOR_HEX[self]


COLOR_HEX = {
    PieceColor.RED: "#FF6B6B",
    PieceColor.TEAL: "#4ECDC4",
    PieceColor.SKY: "#45B7D1",
    PieceColor.SAGE: "#96CEB4",
    PieceColor.YELLOW: "#FECA57",
    PieceColor.PINK: "#FF9FF3",
    PieceColor.BLUE: "#54A0FF",
}


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES = {
    PieceKind.I: _frozen([[1, 1, 1, 1]]),
    PieceKind.O: _frozen([[1, 1], [1, 1]]),
    PieceKind.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    PieceKind.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    PieceKind.J: _frozen([[1, 1, 1], [0, 0, 1]]),
    PieceKind.L: _frozen([[1, 1, 1], [1, 0, 0]]),
    # Block Blast's T slot is five cells (a P-pentomino), not the tetromino T
    PieceKind.T: _frozen([[1, 1, 1], [1, 1, 0]]),
}


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: PieceColor

    @property
    def shape(self) -> Shape:
        return BASE_SHAPES[self.kind]

    def offsets(self) -> List[Tuple[int, int]]:
        """Occupied (row, col) offsets relative to the top-left corner."""
        rows, cols = np.nonzero(self.shape)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]


def generate_piece(rng: random.Random) -> Piece:
    """Pick a kind and a color uniformly and independently."""
    kind = rng.choice(list(PieceKind))
    color = rng.choice(list(PieceColor))
    return Piece(kind=kind, color=color)
