from blocks_puzzle.demo import build_parser, main, play_first_fit_turn, run_demo
from blocks_puzzle.game import GameConfig, Piece

from tests.helpers import make_model


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.hand_size, args.rounds) == (10, 10, 3, 5)
    assert args.log_level == "WARNING"


def test_first_fit_turn_places_top_left_and_pushes():
    model = make_model(4, 4, Piece.parse("**"))
    model.push_state()
    assert play_first_fit_turn(model)
    assert model.get(0, 0) and model.get(0, 1)
    assert model.hand_used()
    assert model.history.current == 1
    assert not play_first_fit_turn(model)


def test_run_demo_ends_on_redone_final_state():
    lines = []
    model = run_demo(GameConfig(width=6, height=6, random_seed=11), rounds=3, out=lines)
    assert lines[0].startswith("=== Round 0 ===")
    assert any(line.startswith("=== Final ===") for line in lines)
    assert lines[-1].startswith("=== After redo ===")
    assert str(model) in lines[-1]
    assert not model.can_redo()


def test_main_prints_board(capsys):
    main(["--width", "5", "--height", "5", "--seed", "1", "--rounds", "1"])
    out = capsys.readouterr().out
    assert "=== Round 0 ===" in out
    assert "Score:" in out
