from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import numpy as np

from blocks_puzzle.game import GameConfig, Model, PieceShapes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play a few first-fit rounds of Blocks and print the board.")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=10)
    p.add_argument("--hand-size", type=int, default=3)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--rounds", type=int, default=5)
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def play_first_fit_turn(model: Model) -> bool:
    """Place the first placeable piece of the hand at its first legal origin.

    Clears lines and pushes the state afterwards. Returns False if nothing fits.
    """
    for k in range(model.hand_size()):
        if not model.placeable(k):
            continue
        for row in range(model.height):
            for col in range(model.width):
                if model.placeable(k, row, col):
                    model.place(k, row, col)
                    model.clear_filled_lines()
                    model.push_state()
                    return True
    return False


def run_demo(config: GameConfig, rounds: int, out: Optional[List[str]] = None) -> Model:
    """Play up to ``rounds`` hands first-fit, then show one undo and one redo."""
    out = out if out is not None else []
    rng = np.random.default_rng(config.random_seed)
    model = Model.from_config(config)
    model.push_state()

    for round_no in range(rounds):
        model.clear_hand()
        for _ in range(config.pieces_per_hand):
            model.deal(PieceShapes.random_piece(rng))
        model.push_state()
        out.append(f"=== Round {round_no} ===\n{model}")
        while not model.hand_used() and play_first_fit_turn(model):
            pass
        logger.info("round %d finished with score %d", round_no, model.score)
        if model.round_over() and not model.hand_used():
            out.append(f"Round over: no piece in the hand fits.\n{model}")
            break

    out.append(f"=== Final ===\n{model}")
    if model.can_undo():
        model.undo()
        out.append(f"=== After undo ===\n{model}")
        model.redo()
        out.append(f"=== After redo ===\n{model}")
    return model


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = GameConfig(width=args.width, height=args.height,
                        pieces_per_hand=args.hand_size, random_seed=args.seed)
    lines: List[str] = []
    run_demo(config, args.rounds, lines)
    print("\n".join(lines))


if __name__ == "__main__":  # pragma: no cover
    main()
