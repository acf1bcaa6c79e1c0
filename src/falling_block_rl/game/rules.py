from __future__ import annotations

from dataclasses import dataclass


MAX_SCORE = 2**31 - 1
LEVEL_THRESHOLD = 5000
MAX_LEVEL = 10
BASE_INTERVAL_MS = 500
POINTS_PER_LINE = 100


@dataclass
class ScoringRules:
    points_per_line: int = POINTS_PER_LINE
    level_threshold: int = LEVEL_THRESHOLD
    max_level: int = MAX_LEVEL
    max_score: int = MAX_SCORE
    base_interval_ms: int = BASE_INTERVAL_MS

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line * level

    def interval_for_level(self, level: int) -> int:
        return self.base_interval_ms // level


@dataclass
class ScoreState:
    """Score, level and the fall interval derived from the level.

    Mutated only through `on_lines_cleared`.
    """

    rules: ScoringRules
    score: int = 0
    level: int = 1

    @property
    def fall_interval_ms(self) -> int:
        return self.rules.interval_for_level(self.level)

    def reset(self) -> None:
        self.score = 0
        self.level = 1

    def on_lines_cleared(self, lines: int) -> bool:
        """Apply a line clear of `lines` rows and return True if the level went up."""
        if lines < 0:
            raise ValueError(f"lines cleared must be non-negative, got {lines}")
        # saturating add
        self.score = min(self.rules.max_score, self.score + self.rules.score_for_lines(lines, self.level))
        if self.score >= self.level * self.rules.level_threshold and self.level < self.rules.max_level:
            self.level += 1
            return True
        return False
