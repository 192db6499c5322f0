from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Protocol, Tuple

import numpy as np


class PieceLike(Protocol):
    """Anything the board can place: a bounding box plus a per-cell fill test."""

    def width(self) -> int: ...

    def height(self) -> int: ...

    def get(self, row: int, col: int) -> bool: ...


class PieceType(IntEnum):
    I = 0
    O = 1
    T = 2
    L = 3
    J = 4
    S = 5
    Z = 6


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


class PieceShapes:
    """Static piece shape definitions"""

    SHAPES = {
        PieceType.I: np.array([[1, 1, 1, 1]], dtype=bool),
        PieceType.O: np.array([[1, 1], [1, 1]], dtype=bool),
        PieceType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=bool),
        PieceType.L: np.array([[1, 0, 0], [1, 1, 1]], dtype=bool),
        PieceType.J: np.array([[0, 0, 1], [1, 1, 1]], dtype=bool),
        PieceType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=bool),
        PieceType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=bool),
    }

    @classmethod
    def get_shape(cls, piece_type: PieceType, rotation: int = 0) -> Shape:
        return _rot90(cls.SHAPES[piece_type], rotation).copy()

    @classmethod
    def random_piece(cls, rng: np.random.Generator) -> "Piece":
        """Pick a catalogue piece with a random type and rotation."""
        kind = PieceType(int(rng.integers(0, len(PieceType))))
        return Piece.of(kind, int(rng.integers(0, 4)))


@dataclass(frozen=True, eq=False)
class Piece:
    """Immutable filled/empty mask with an optional catalogue kind.

    Two pieces compare equal when their masks are equal; the kind is only a
    label used for observations.
    """

    mask: Shape
    kind: Optional[PieceType] = None
    rotation: int = 0
    _cells: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        mask = np.array(self.mask, dtype=bool)
        if mask.ndim != 2 or mask.shape[0] == 0 or mask.shape[1] == 0:
            raise ValueError("piece mask must be a non-empty 2D array")
        mask.setflags(write=False)
        object.__setattr__(self, "mask", mask)
        object.__setattr__(self, "_cells", int(mask.sum()))

    @classmethod
    def of(cls, kind: PieceType, rotation: int = 0) -> "Piece":
        return cls(PieceShapes.get_shape(kind, rotation), kind, rotation % 4)

    @classmethod
    def parse(cls, text: str) -> "Piece":
        """Build a piece from rows of ``*`` (filled) and ``.`` (empty).

        Rows are separated by newlines or whitespace, e.g. ``"*** .*."``.
        """
        rows = text.split()
        if not rows or len({len(r) for r in rows}) != 1:
            raise ValueError(f"ragged or empty piece description: {text!r}")
        for r in rows:
            if set(r) - {"*", "."}:
                raise ValueError(f"bad piece character in {r!r}")
        return cls(np.array([[c == "*" for c in r] for r in rows], dtype=bool))

    def width(self) -> int:
        return int(self.mask.shape[1])

    def height(self) -> int:
        return int(self.mask.shape[0])

    def get(self, row: int, col: int) -> bool:
        return bool(self.mask[row, col])

    def cell_count(self) -> int:
        return self._cells

    def rotated(self, delta: int) -> "Piece":
        return Piece(_rot90(self.mask, delta).copy(), self.kind, (self.rotation + delta) % 4)

    def cells(self) -> List[Tuple[int, int]]:
        """Offsets (row, col) of the filled cells."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.mask))]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return np.array_equal(self.mask, other.mask)

    def __hash__(self) -> int:
        return hash((self.mask.shape, self.mask.tobytes()))

    def __str__(self) -> str:
        return "\n".join("".join("*" if cell else "." for cell in row) for row in self.mask) + "\n"
