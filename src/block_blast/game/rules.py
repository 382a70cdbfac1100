from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 10
    start_level: int = 1
    max_level: int = 10

    def __post_init__(self) -> None:
        if self.points_per_line < 0:
            raise ValueError("points_per_line must be non-negative")
        if self.max_level < 1:
            raise ValueError("max_level must be at least 1")
        if not 1 <= self.start_level <= self.max_level:
            raise ValueError("start_level must be in [1, max_level]")

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line * level

    def next_level(self, level: int, lines: int) -> int:
        # Any clear bumps the level by one, never past the cap
        if lines <= 0:
            return level
        return min(self.max_level, level + 1)
