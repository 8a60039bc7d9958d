from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)

    def __post_init__(self) -> None:
        if len(self.line_clear_scores) != 4:
            raise ValueError("line_clear_scores needs one entry per 1..4 cleared lines")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        # Tetrominoes span at most 4 rows, so this only applies to custom shapes
        return self.line_clear_scores[-1] + (lines - 4) * 400
