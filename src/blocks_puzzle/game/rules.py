from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    """Line-clear scoring with a consecutive-clear streak multiplier.

    Placing a piece is worth one point per filled cell. Clearing ``nrows``
    rows and ``ncols`` columns on a ``width x height`` board is worth every
    cleared cell once, i.e. ``nrows*width + ncols*height - nrows*ncols``,
    plus a bonus of the uncorrected line total times the streak length
    before the clear.
    """

    placement_points_per_cell: int = 1

    def score_for_placement(self, cells_filled: int) -> int:
        return cells_filled * self.placement_points_per_cell

    def score_for_lines(self, nrows: int, ncols: int, width: int, height: int, streak: int) -> int:
        if nrows <= 0 and ncols <= 0:
            return 0
        base = nrows * width + ncols * height
        overlap = nrows * ncols
        return base - overlap + base * streak

    @staticmethod
    def next_streak(streak: int, nrows: int, ncols: int) -> int:
        if nrows > 0 or ncols > 0:
            return streak + 1
        return 0
