"""Composite 0-100 scores built from weighted, normalised sub-metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.constants import ANNUAL_LEAVE_ALLOWANCE_DAYS
from .rates import clamp


@dataclass(frozen=True)
class ScoreComponent:
    """One weighted input of a composite score.

    The raw value is divided by ``scale`` and expressed in points out of 100;
    ``inverted`` components score ``100 - points`` (fewer is better). Points
    are then clamped to ``[0, cap]`` (``cap=None`` means no upper bound).
    """

    name: str
    weight: float
    scale: float = 100.0
    inverted: bool = False
    cap: Optional[float] = 100.0

    def points(self, value: Optional[float]) -> float:
        raw = (value or 0.0) / self.scale * 100 if self.scale else 0.0
        if self.inverted:
            raw = 100 - raw
        return clamp(raw, 0.0, self.cap)


@dataclass(frozen=True)
class ScoreWeights:
    components: tuple[ScoreComponent, ...]


@dataclass(frozen=True)
class RatingBands:
    """Lower bounds (inclusive) for each rating label, best first."""

    excellent: float
    good: float
    average: float

    def rate(self, score: float) -> str:
        if score >= self.excellent:
            return "Excellent"
        if score >= self.good:
            return "Good"
        if score >= self.average:
            return "Average"
        return "Needs Improvement"


HR_PERFORMANCE_WEIGHTS = ScoreWeights(
    components=(
        ScoreComponent("attendance_rate", 0.6),
        ScoreComponent("leave_days", 0.2, scale=ANNUAL_LEAVE_ALLOWANCE_DAYS, inverted=True, cap=None),
        ScoreComponent("late_rate", 0.2, inverted=True, cap=None),
    )
)

PRODUCTIVITY_WEIGHTS = ScoreWeights(
    components=(
        ScoreComponent("hourly_rate", 0.4, scale=100, cap=None),
        ScoreComponent("jobs_per_month", 0.3, scale=10, cap=None),
        ScoreComponent("total_earnings", 0.3, scale=10000, cap=None),
    )
)

HR_RATING_BANDS = RatingBands(excellent=90, good=75, average=60)
PRODUCTIVITY_RATING_BANDS = RatingBands(excellent=80, good=60, average=40)


def composite_score(values: Mapping[str, Optional[float]], weights: ScoreWeights) -> float:
    """Weighted sum of component points, clamped to ``[0, 100]``.

    Components missing from ``values`` contribute as a raw value of 0.
    """
    total = sum(c.points(values.get(c.name)) * c.weight for c in weights.components)
    return clamp(total, 0.0, 100.0)
