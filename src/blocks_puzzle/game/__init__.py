"""Rules engine for the Blocks puzzle.

Exports the engine and its supporting classes:
- Board: cell grid, placement checks and line clearing
- Piece: immutable piece mask; PieceLike is the capability the board needs
- Hand / Slot: the current round's pieces
- ScoringRules: placement and streak-based line-clear scoring
- History / GameState: undo/redo snapshots
- Model: the engine facade tying all of the above together
"""

from .board import Board, ClearResult
from .hand import Hand, Slot
from .history import GameState, History
from .model import ContractViolation, GameConfig, Model
from .pieces import Piece, PieceLike, PieceShapes, PieceType
from .rules import ScoringRules

__all__ = [
    "Board",
    "ClearResult",
    "Hand",
    "Slot",
    "GameState",
    "History",
    "ContractViolation",
    "GameConfig",
    "Model",
    "Piece",
    "PieceLike",
    "PieceShapes",
    "PieceType",
    "ScoringRules",
]
