from __future__ import annotations

from typing import List, Tuple

import numpy as np


EMPTY = 0

Coordinate = Tuple[int, int]


class GameGrid:
    """Square board for block placement.

    Cells hold 0 when empty and a positive color id once filled. Rows are
    indexed top to bottom, columns left to right.
    """

    def __init__(self, size: int = 8) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    @staticmethod
    def _check_shape(shape: np.ndarray) -> None:
        if shape.ndim != 2:
            raise ValueError(f"piece shape must be 2-D, got {shape.ndim}-D")

    def can_place(self, shape: np.ndarray, row: int, col: int) -> bool:
        """Check every occupied shape cell lands inside the board on an empty cell."""
        self._check_shape(shape)
        piece_h, piece_w = shape.shape
        for pr in range(piece_h):
            for pc in range(piece_w):
                if not shape[pr, pc]:
                    continue
                r, c = row + pr, col + pc
                if not self.is_inside(r, c):
                    return False
                if self.grid[r, c] != EMPTY:
                    return False
        return True

    def place(self, shape: np.ndarray, row: int, col: int, value: int) -> bool:
        """Write `value` into the occupied cells; no-op returning False if invalid."""
        if value == EMPTY:
            raise ValueError("cannot place the empty value")
        if not self.can_place(shape, row, col):
            return False
        piece_h, piece_w = shape.shape
        for pr in range(piece_h):
            for pc in range(piece_w):
                if shape[pr, pc]:
                    self.grid[row + pr, col + pc] = value
        return True

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != EMPTY))

    def is_col_full(self, col: int) -> bool:
        return bool(np.all(self.grid[:, col] != EMPTY))

    def clear_lines(self) -> int:
        """Clear full rows, then full columns, scanning the board as it changes.

        A cleared row drops the rows above it by one and opens an empty row at
        the top. A cleared column pulls the columns to its right one step left
        and opens an empty column at the right edge. The scan index advances
        past a cleared line, so the line shifted into its place is not
        re-checked in the same pass, and column checks see the board after
        the row pass.
        """
        cleared = 0
        for row in range(self.size):
            if self.is_row_full(row):
                self.grid[1 : row + 1, :] = self.grid[:row, :].copy()
                self.grid[0, :] = EMPTY
                cleared += 1
        for col in range(self.size):
            if self.is_col_full(col):
                self.grid[:, col:-1] = self.grid[:, col + 1 :].copy()
                self.grid[:, -1] = EMPTY
                cleared += 1
        return cleared

    def valid_placements(self, shape: np.ndarray) -> List[Coordinate]:
        """All (row, col) offsets where `shape` fits."""
        return [
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.can_place(shape, row, col)
        ]

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_empty(self) -> bool:
        return self.filled_cells() == 0

    def view(self) -> np.ndarray:
        """Read-only view of the cells, for renderers."""
        v = self.grid.view()
        v.setflags(write=False)
        return v

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid


def format_grid(grid: np.ndarray) -> str:
    return "\n".join("".join("█" if cell else "·" for cell in row) for row in grid)


def print_grid(grid: np.ndarray) -> None:
    print(format_grid(grid))
