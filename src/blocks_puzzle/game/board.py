from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .pieces import PieceLike


@dataclass(frozen=True)
class ClearResult:
    rows: Tuple[int, ...]
    cols: Tuple[int, ...]
    awarded: int = 0

    @property
    def nrows(self) -> int:
        return len(self.rows)

    @property
    def ncols(self) -> int:
        return len(self.cols)

    @property
    def cleared(self) -> bool:
        return bool(self.rows or self.cols)


class Board:
    """Fixed-size grid of filled (True) and empty (False) cells.

    Cells are indexed ``[row, col]`` with row 0 at the top. The board knows
    nothing about scoring; it only validates and applies placements and
    clears complete lines.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid width or height: {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=bool)

    def is_cell(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> bool:
        """True iff (row, col) is off the board or already filled."""
        if not self.is_cell(row, col):
            return True
        return bool(self.cells[row, col])

    def fits(self, piece: Optional[PieceLike], row: int, col: int) -> bool:
        if piece is None:
            return False
        h, w = piece.height(), piece.width()
        if row < 0 or col < 0 or row + h > self.height or col + w > self.width:
            return False
        for pr in range(h):
            for pc in range(w):
                if piece.get(pr, pc) and self.cells[row + pr, col + pc]:
                    return False
        return True

    def fits_anywhere(self, piece: Optional[PieceLike]) -> bool:
        for row in range(self.height):
            for col in range(self.width):
                if self.fits(piece, row, col):
                    return True
        return False

    def fill(self, piece: PieceLike, row: int, col: int) -> int:
        """Fill the piece's cells at (row, col) and return how many were filled.

        Assumes the position was validated with ``fits``.
        """
        filled = 0
        for pr in range(piece.height()):
            for pc in range(piece.width()):
                if piece.get(pr, pc):
                    self.cells[row + pr, col + pc] = True
                    filled += 1
        return filled

    def row_column_counts(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.cells.sum(axis=1), self.cells.sum(axis=0)

    def clear_full_lines(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """Clear every full row and column at once; return their indices.

        Both sets are chosen from counts taken before any cell is cleared, so
        a row and a column crossing at a shared cell both qualify.
        """
        row_counts, col_counts = self.row_column_counts()
        full_rows = tuple(int(r) for r in np.flatnonzero(row_counts == self.width))
        full_cols = tuple(int(c) for c in np.flatnonzero(col_counts == self.height))
        if full_rows:
            self.cells[list(full_rows), :] = False
        if full_cols:
            self.cells[:, list(full_cols)] = False
        return full_rows, full_cols

    def filled_count(self) -> int:
        return int(self.cells.sum())

    def load(self, cells: np.ndarray) -> None:
        """Replace the cell contents with a copy of ``cells``."""
        if cells.shape != (self.height, self.width):
            raise ValueError(
                f"cell array of shape {cells.shape} does not match board {self.height}x{self.width}"
            )
        self.cells = np.array(cells, dtype=bool, copy=True)

    def copy(self) -> "Board":
        new_board = Board(self.width, self.height)
        new_board.cells = self.cells.copy()
        return new_board

    def __str__(self) -> str:
        return "".join("".join("*" if cell else "." for cell in row) + "\n" for row in self.cells)
