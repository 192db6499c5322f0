from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .hand import Slot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of everything undo/redo restores.

    Owns a private read-only copy of the cells, so it never aliases a live
    board.
    """

    cells: np.ndarray
    hand: Tuple[Slot, ...]
    score: int
    streak_length: int

    @classmethod
    def capture(cls, cells: np.ndarray, hand: Tuple[Slot, ...], score: int, streak_length: int) -> "GameState":
        saved = np.array(cells, dtype=bool, copy=True)
        saved.setflags(write=False)
        return cls(saved, tuple(hand), int(score), int(streak_length))

    def copy(self) -> "GameState":
        return GameState.capture(self.cells, self.hand, self.score, self.streak_length)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            np.array_equal(self.cells, other.cells)
            and self.hand == other.hand
            and self.score == other.score
            and self.streak_length == other.streak_length
        )


class History:
    """Undo/redo store of GameState snapshots.

    ``_states[current]`` is the last state pushed and not undone;
    ``_states[current+1 .. last]`` are undone states that can be redone.
    The list only grows: slots past ``last`` are stale storage that the next
    ``push`` at that index overwrites. Both cursors are -1 until the first
    push.
    """

    def __init__(self) -> None:
        self._states: List[GameState] = []
        self._current = -1
        self._last = -1

    @property
    def current(self) -> int:
        return self._current

    @property
    def last(self) -> int:
        return self._last

    def __len__(self) -> int:
        return self._last + 1

    @property
    def capacity(self) -> int:
        return len(self._states)

    def push(self, state: GameState) -> None:
        self._current += 1
        self._last = self._current
        if self._current >= len(self._states):
            self._states.append(state)
        else:
            self._states[self._current] = state
        logger.debug("pushed state %d (capacity %d)", self._current, len(self._states))

    def can_undo(self) -> bool:
        return self._current > 0

    def can_redo(self) -> bool:
        return self._current < self._last

    def undo(self) -> Optional[GameState]:
        """Step back one state and return it, or None at the initial state."""
        if not self.can_undo():
            return None
        self._current -= 1
        logger.debug("undo to state %d of %d", self._current, self._last)
        return self._states[self._current]

    def redo(self) -> Optional[GameState]:
        if not self.can_redo():
            return None
        self._current += 1
        logger.debug("redo to state %d of %d", self._current, self._last)
        return self._states[self._current]

    def peek(self) -> Optional[GameState]:
        if self._current < 0:
            return None
        return self._states[self._current]

    def copy(self) -> "History":
        """Independent history holding copies of the valid states only."""
        new_history = History()
        new_history._states = [s.copy() for s in self._states[: self._last + 1]]
        new_history._current = self._current
        new_history._last = self._last
        return new_history
