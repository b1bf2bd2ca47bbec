from __future__ import annotations

import math

from ats_engine.schemas.analysis import CategoryResult, Finding


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scaled_points(points: int, ratio: float) -> int:
    return round_half_up(points * min(max(ratio, 0.0), 1.0))


def banded_points(count: int, table: tuple[int, ...]) -> int:
    """Points for a count from a diminishing-returns table; the last entry caps it."""
    if not table:
        return 0
    return table[min(max(count, 0), len(table) - 1)]


class FindingRecorder:
    """Collects a category's findings in evaluation order and sums them into a CategoryResult."""

    def __init__(self, max_score: int) -> None:
        self.max_score = max_score
        self._findings: list[Finding] = []

    @property
    def earned(self) -> int:
        return sum(finding.earned for finding in self._findings)

    def bonus(self, message: str, points: int) -> None:
        self._findings.append(Finding(message=message, earned=points, possible=points))

    def check(self, message: str, *, earned: int, possible: int, advice: str | None = None) -> None:
        earned = min(max(earned, 0), possible)
        if earned >= possible:
            advice = None
        self._findings.append(Finding(message=message, earned=earned, possible=possible, advice=advice))

    def advisory(self, message: str, advice: str) -> None:
        self._findings.append(Finding(message=message, advice=advice))

    def note(self, message: str) -> None:
        self._findings.append(Finding(message=message))

    def result(self, *, zero_score: bool = False) -> CategoryResult:
        score = 0 if zero_score else min(max(self.earned, 0), self.max_score)
        return CategoryResult(
            score=score,
            max_score=self.max_score,
            details=[finding.message for finding in self._findings],
            findings=list(self._findings),
        )
