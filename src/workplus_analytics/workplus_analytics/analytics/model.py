from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from ..core.constants import (
    DEFAULT_ALERT_LIMIT,
    DEFAULT_CHART_WORKERS,
    DEFAULT_DAILY_WINDOW,
    DEFAULT_DISTRIBUTION_TOP_K,
    DEFAULT_EARNINGS_DAILY_WINDOW,
    DEFAULT_JOB_DISTRIBUTION_TOP_K,
    DEFAULT_MONTHLY_WINDOW,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TOP_WORKERS,
    UNKNOWN_LABEL,
)
from ..core.enums import AlertSeverity


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_view(value: Any) -> Any:
    """Convert view-model objects into JSON-ready structures with camelCase keys."""
    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): to_view(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_view(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_view(v) for v in value]
    return value


class ViewModel:
    """Mixin for dashboard view-models."""

    def to_dict(self) -> dict[str, Any]:
        return to_view(self)


@dataclass(frozen=True)
class AggregationConfig:
    """Per-call settings for dashboard aggregation.

    ``today`` anchors every "last N days/months" window.
    """

    today: date
    daily_window: int = DEFAULT_DAILY_WINDOW
    monthly_window: int = DEFAULT_MONTHLY_WINDOW
    earnings_daily_window: int = DEFAULT_EARNINGS_DAILY_WINDOW
    top_workers: int = DEFAULT_TOP_WORKERS
    chart_workers: int = DEFAULT_CHART_WORKERS
    distribution_top_k: int = DEFAULT_DISTRIBUTION_TOP_K
    job_distribution_top_k: int = DEFAULT_JOB_DISTRIBUTION_TOP_K
    recent_limit: int = DEFAULT_RECENT_LIMIT
    alert_limit: int = DEFAULT_ALERT_LIMIT
    unknown_label: str = UNKNOWN_LABEL


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float


@dataclass(frozen=True)
class TrendBucket:
    """One fixed time slot of a trend chart."""

    key: str
    label: str
    count: int = 0
    sums: dict[str, float] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)

    def category(self, name: str) -> int:
        return self.by_category.get(name, 0)

    def total(self, name: str) -> float:
        return self.sums.get(name, 0.0)


@dataclass(frozen=True)
class DistributionSlice:
    label: str
    count: int
    total: float = 0.0


@dataclass(frozen=True)
class Alert:
    severity: AlertSeverity
    message: str


@dataclass(frozen=True)
class Comparison:
    today: float
    yesterday: float

    @property
    def change(self) -> float:
        return self.today - self.yesterday


@dataclass(frozen=True)
class TargetProgress:
    target: float
    actual: float
    percentage: float


def chart_points(slices: list[DistributionSlice], *, by_total: bool = False) -> list[ChartPoint]:
    return [ChartPoint(label=s.label, value=s.total if by_total else s.count) for s in slices]


def truncate_label(label: Optional[str], length: int) -> str:
    text = label or ""
    return text[:length] + "..." if len(text) > length else text
