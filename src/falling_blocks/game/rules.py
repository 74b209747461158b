from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .grid import EMPTY


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 400, 900, 2000)
    perfect_clear_multiplier: int = 10
    levels_per_tier: int = 2
    max_soft_drop_bonus: int = 5
    lines_per_level: int = 10

    def line_bonus(self, lines: int) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0

    def soft_drop_bonus(self, level: int) -> int:
        """Points per soft-drop step; also the multiplier for line clears."""
        return min(max(level, 0) // self.levels_per_tier + 1, self.max_soft_drop_bonus)

    def is_perfect_clear(self, cleared_rows: Sequence[int], remaining_rows: np.ndarray, total_rows: int) -> bool:
        count = len(cleared_rows)
        if count == 0:
            return False
        if np.any(np.asarray(remaining_rows, dtype=str) != EMPTY):
            return False
        return list(cleared_rows) == list(range(total_rows - count, total_rows))

    def score(
        self,
        prev_score: int,
        cleared_rows: Sequence[int],
        remaining_rows: np.ndarray,
        level: int = 0,
        total_rows: int = 22,
    ) -> int:
        if not cleared_rows:
            return prev_score
        base = prev_score + self.soft_drop_bonus(level) * self.line_bonus(len(cleared_rows))
        if self.is_perfect_clear(cleared_rows, remaining_rows, total_rows):
            return self.perfect_clear_multiplier * base
        return base

    def level_for_lines(self, lines: int) -> int:
        return lines // self.lines_per_level


def next_gravity_interval(current: int, minimum: int = 25) -> int:
    """Gravity speed-up applied once per level gained."""
    if current > 100:
        interval = current - 100
    else:
        interval = current - 25
    return max(interval, minimum)
