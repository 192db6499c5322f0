import numpy as np
import pytest

from blocks_puzzle.game import Board, ContractViolation, Model, Piece, PieceType

from tests.helpers import make_model


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        Model(0, 4)
    with pytest.raises(ValueError):
        Model(4, -1)
    with pytest.raises(ValueError):
        Board(3, 0)


def test_new_model_is_empty():
    model = Model(5, 3)
    assert model.width == 5
    assert model.height == 3
    assert model.score == 0
    assert model.hand_size() == 0
    assert not model.cells.any()


def test_footprint_outside_board_is_never_placeable():
    model = Model(4, 4)
    line = Piece.of(PieceType.I)
    assert model.placeable(line, 0, 0)
    assert not model.placeable(line, 0, 1)
    assert not model.placeable(line, 4, 0)
    assert not model.placeable(line, -1, 0)
    assert not model.placeable(line, 0, -1)
    assert not model.placeable(line.rotated(1), 1, 0)


def test_absent_piece_is_not_placeable():
    model = Model(4, 4)
    assert not model.placeable(None, 0, 0)
    assert not model.placeable(None)


def test_empty_piece_cells_do_not_conflict():
    model = Model(3, 2)
    model.place(Piece.parse("*"), 0, 0)
    corner = Piece.parse(".* **")
    assert model.placeable(corner, 0, 0)
    assert not model.placeable(Piece.parse("** **"), 0, 0)


def test_place_fills_piece_cells_and_scores_cell_count():
    model = Model(4, 4)
    t = Piece.of(PieceType.T)
    gained = model.place(t, 1, 1)
    assert gained == 4
    assert model.score == 4
    for r, c in t.cells():
        assert model.get(1 + r, 1 + c)
    assert model.cells.sum() == 4
    assert not model.get(1, 1)


def test_place_without_room_is_contract_violation():
    model = Model(4, 4)
    model.place(Piece.parse("*"), 0, 0)
    with pytest.raises(ContractViolation):
        model.place(Piece.parse("*"), 0, 0)
    with pytest.raises(AssertionError):
        model.place(Piece.of(PieceType.I), 0, 1)
    assert model.score == 1


def test_placeable_anywhere_scans_all_origins():
    model = Model(3, 3)
    model.place(Piece.parse("*** *.* ***"), 0, 0)
    assert model.placeable(Piece.parse("*"))
    assert not model.placeable(Piece.parse("**"))
    assert model.placeable(Piece.parse("*"), 1, 1)


def test_get_reports_off_board_as_blocked():
    model = Model(2, 2)
    assert not model.get(0, 0)
    assert model.get(-1, 0)
    assert model.get(0, 2)
    assert model.is_cell(1, 1)
    assert not model.is_cell(2, 0)


def test_cells_view_is_read_only():
    model = Model(2, 2)
    with pytest.raises(ValueError):
        model.cells[0, 0] = True


def test_placeable_requires_both_coordinates():
    model = make_model(4, 4, Piece.parse("*"))
    with pytest.raises(TypeError):
        model.placeable(0, 1)


def test_board_load_checks_shape():
    board = Board(3, 2)
    with pytest.raises(ValueError):
        board.load(np.zeros((3, 2), dtype=bool))
    board.load(np.ones((2, 3), dtype=bool))
    assert board.filled_count() == 6
