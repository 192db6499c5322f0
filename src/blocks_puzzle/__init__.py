"""Blocks: a placement puzzle rules engine with undo/redo."""

from .game import ContractViolation, GameConfig, Model, Piece, PieceType

__all__ = ["ContractViolation", "GameConfig", "Model", "Piece", "PieceType"]

__version__ = "0.1.0"
