from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

import numpy as np

from .board import Board, ClearResult
from .hand import Hand
from .history import GameState, History
from .pieces import PieceLike
from .rules import ScoringRules

logger = logging.getLogger(__name__)

PieceRef = Union[PieceLike, int, None]


class ContractViolation(AssertionError):
    """A caller broke a documented precondition. Indicates a bug, not a game outcome."""


@dataclass
class GameConfig:
    width: int = 10
    height: int = 10
    pieces_per_hand: int = 3
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000


class Model:
    """State of a Blocks puzzle: a board of cells, a hand of pieces, a score.

    Rows are numbered from the top (row 0) down and columns from the left.
    A typical turn is ``placeable`` -> ``place`` -> ``clear_filled_lines`` ->
    ``push_state``; ``undo`` and ``redo`` then walk the pushed states.

    Methods that take a piece also accept a hand index ``k``, meaning
    ``piece(k)``.
    """

    def __init__(self, width: int, height: int, rules: Optional[ScoringRules] = None) -> None:
        self._board = Board(width, height)
        self._hand = Hand()
        self._history = History()
        self.rules = rules or ScoringRules()
        self._score = 0
        self._streak_length = 0

    @classmethod
    def from_config(cls, config: GameConfig, rules: Optional[ScoringRules] = None) -> "Model":
        return cls(config.width, config.height, rules)

    # -- board --------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the board, indexed [row, col]."""
        view = self._board.cells.view()
        view.setflags(write=False)
        return view

    def is_cell(self, row: int, col: int) -> bool:
        return self._board.is_cell(row, col)

    def get(self, row: int, col: int) -> bool:
        """True iff (row, col) is off the board or filled, i.e. no piece may cover it."""
        return self._board.get(row, col)

    def _resolve(self, piece: PieceRef) -> Optional[PieceLike]:
        if isinstance(piece, (int, np.integer)):
            return self.piece(int(piece))
        return piece

    def placeable(self, piece: PieceRef, row: Optional[int] = None, col: Optional[int] = None) -> bool:
        """Whether ``piece`` fits with its top-left corner at (row, col).

        With no position, whether it fits anywhere on the board. Always False
        for an absent piece, an out-of-range hand index or a used slot.
        """
        resolved = self._resolve(piece)
        if row is None and col is None:
            return self._board.fits_anywhere(resolved)
        if row is None or col is None:
            raise TypeError("placeable() needs both row and col, or neither")
        return self._board.fits(resolved, row, col)

    def place(self, piece: PieceRef, row: int, col: int) -> int:
        """Place ``piece`` at (row, col) and return the points it earned.

        The caller must have checked ``placeable(piece, row, col)``; anything
        else raises ContractViolation. Placing by hand index also empties that
        slot without renumbering the rest of the hand.
        """
        resolved = self._resolve(piece)
        if not self._board.fits(resolved, row, col):
            raise ContractViolation(f"piece {piece!r} is not placeable at ({row}, {col})")
        filled = self._board.fill(resolved, row, col)
        gained = self.rules.score_for_placement(filled)
        self._score += gained
        if isinstance(piece, (int, np.integer)):
            self._hand.use(int(piece))
        return gained

    def row_column_counts(self) -> Tuple[np.ndarray, np.ndarray]:
        """(row_counts, col_counts): filled cells per row and per column."""
        return self._board.row_column_counts()

    def clear_filled_lines(self) -> ClearResult:
        """Clear all completely filled rows and columns, updating score and streak."""
        rows, cols = self._board.clear_full_lines()
        awarded = self.rules.score_for_lines(
            len(rows), len(cols), self.width, self.height, self._streak_length
        )
        self._score += awarded
        self._streak_length = self.rules.next_streak(self._streak_length, len(rows), len(cols))
        if rows or cols:
            logger.debug(
                "cleared rows %s cols %s for %d points, streak now %d",
                rows, cols, awarded, self._streak_length,
            )
        return ClearResult(rows, cols, awarded)

    @property
    def score(self) -> int:
        return self._score

    @property
    def streak_length(self) -> int:
        return self._streak_length

    # -- hand ---------------------------------------------------------------

    def hand_size(self) -> int:
        """Number of pieces dealt since creation or the last clear_hand()."""
        return len(self._hand)

    def piece(self, k: int) -> Optional[PieceLike]:
        return self._hand.piece(k)

    def deal(self, piece: PieceLike) -> None:
        self._hand.deal(piece)

    def clear_hand(self) -> None:
        self._hand.clear()

    def hand_used(self) -> bool:
        return self._hand.used()

    def round_over(self) -> bool:
        """True iff no piece left in the hand fits anywhere (vacuously for an empty hand)."""
        return not any(self._board.fits_anywhere(p) for p in self._hand.pieces())

    # -- history ------------------------------------------------------------

    def _snapshot(self) -> GameState:
        return GameState.capture(self._board.cells, self._hand.slots(), self._score, self._streak_length)

    def _restore(self, state: GameState) -> None:
        cells = np.array(state.cells, dtype=bool, copy=True)
        slots = list(state.hand)
        self._board.cells = cells
        self._hand.load(slots)
        self._score = state.score
        self._streak_length = state.streak_length

    def push_state(self) -> None:
        """Save the current state on the undo history, dropping any redo branch."""
        self._history.push(self._snapshot())

    def undo(self) -> None:
        """Return to the previously pushed state; does nothing at the first one."""
        state = self._history.undo()
        if state is not None:
            self._restore(state)

    def redo(self) -> None:
        """Re-apply one undone state; does nothing if none are available."""
        state = self._history.redo()
        if state is not None:
            self._restore(state)

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    @property
    def history(self) -> History:
        return self._history

    # -- copying and display ------------------------------------------------

    def copy(self) -> "Model":
        """Fully independent copy: board, hand and history share no storage."""
        new_model = Model(self.width, self.height, replace(self.rules))
        new_model._board = self._board.copy()
        new_model._hand.load(self._hand.slots())
        new_model._history = self._history.copy()
        new_model._score = self._score
        new_model._streak_length = self._streak_length
        return new_model

    def __copy__(self) -> "Model":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Model":
        return self.copy()

    def hand_to_string(self) -> str:
        out = []
        for k in range(self.hand_size()):
            out.append(f"\n{k}:\n")
            p = self.piece(k)
            if p is None:
                out.append("   empty\n")
            else:
                out.append("".join(f"   {line}\n" for line in str(p).splitlines()))
        return "".join(out)

    def __str__(self) -> str:
        return f"{self._board}Score: {self._score}.\nHand:\n{self.hand_to_string()}"
