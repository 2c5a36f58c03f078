"""Score arithmetic: averages, letter bands and band histograms.

Bands:
    A: score >= 90
    B: 80 <= score < 90
    C: 70 <= score < 80
    D: 60 <= score < 70
    F: score < 60
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

LETTERS = ("A", "B", "C", "D", "F")

BAND_LABELS = (
    "A (90-100%)",
    "B (80-89%)",
    "C (70-79%)",
    "D (60-69%)",
    "F (Below 60%)",
)

# Lower bound (inclusive) for each letter except F
_THRESHOLDS = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)


def round_one(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def average_score(scores: Iterable[float]) -> float:
    """Arithmetic mean rounded to one decimal; 0.0 when there are no scores."""
    values = [float(s) for s in scores]
    if not values:
        return 0.0
    return round_one(sum(values) / len(values))


def letter_grade(score: float) -> str:
    """Classify a score into its letter band."""
    for lower, letter in _THRESHOLDS:
        if score >= lower:
            return letter
    return "F"


@dataclass
class GradeDistribution:
    """Histogram of scores over the five letter bands (A..F order)."""

    labels: list[str] = field(default_factory=lambda: list(BAND_LABELS))
    data: list[int] = field(default_factory=lambda: [0] * len(LETTERS))

    @property
    def total(self) -> int:
        return sum(self.data)

    def by_letter(self) -> dict[str, int]:
        return dict(zip(LETTERS, self.data))


def grade_distribution(scores: Iterable[float]) -> GradeDistribution:
    """Count scores per band. Every score lands in exactly one band."""
    distribution = GradeDistribution()
    for score in scores:
        distribution.data[LETTERS.index(letter_grade(score))] += 1
    return distribution
