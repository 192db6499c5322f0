from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .pieces import PieceLike


@dataclass(frozen=True)
class Slot:
    """One hand position: either holding a piece or used up."""

    piece: Optional[PieceLike] = None

    @classmethod
    def empty(cls) -> "Slot":
        return _EMPTY

    @property
    def used(self) -> bool:
        return self.piece is None


_EMPTY = Slot()


class Hand:
    """Ordered piece slots for the current round.

    Slot indices never shift: using a piece turns its slot empty in place.
    Only ``clear`` shrinks the hand, back to zero slots.
    """

    def __init__(self) -> None:
        self._slots: List[Slot] = []

    def __len__(self) -> int:
        return len(self._slots)

    def deal(self, piece: PieceLike) -> None:
        if piece is None:
            raise ValueError("cannot deal an absent piece")
        self._slots.append(Slot(piece))

    def clear(self) -> None:
        self._slots.clear()

    def piece(self, k: int) -> Optional[PieceLike]:
        if k < 0 or k >= len(self._slots):
            return None
        return self._slots[k].piece

    def use(self, k: int) -> None:
        self._slots[k] = Slot.empty()

    def used(self) -> bool:
        return all(slot.used for slot in self._slots)

    def pieces(self) -> List[PieceLike]:
        """Pieces still available, in slot order."""
        return [slot.piece for slot in self._slots if slot.piece is not None]

    def slots(self) -> Tuple[Slot, ...]:
        return tuple(self._slots)

    def load(self, slots: Sequence[Slot]) -> None:
        self._slots = list(slots)
