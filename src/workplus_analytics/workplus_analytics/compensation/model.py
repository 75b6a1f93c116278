from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from ..core.enums import EntryType, JobMode


@dataclass(frozen=True)
class TimeBased:
    """Actual outcome of an hourly job."""

    hours_taken: float


@dataclass(frozen=True)
class UnitBased:
    """Actual outcome of an item-rated job."""

    items_completed: float


Measure = Union[TimeBased, UnitBased]


def mode_of(measure: Measure) -> JobMode:
    return JobMode.HOURLY if isinstance(measure, TimeBased) else JobMode.ITEM


def actual_of(measure: Measure) -> float:
    if isinstance(measure, TimeBased):
        return measure.hours_taken
    return measure.items_completed


@dataclass(frozen=True)
class PerformanceObservation:
    """One worker's (or group's) actual outcome for a job on a date/shift."""

    job_id: int
    measure: Measure
    entry_type: EntryType = EntryType.INDIVIDUAL
    worker_id: Optional[int] = None
    group_id: Optional[int] = None
    is_post_lunch: bool = False
    remarks: Optional[str] = None
    entry_date: Optional[datetime] = None


@dataclass(frozen=True)
class CompensationResult:
    """Derived amounts for one observation. Never stored on its own.

    ``productive``/``extra``/``underperformance`` are in hours for hourly jobs
    and in items for item jobs. ``underperformance`` is ``None`` in item mode.
    """

    mode: JobMode
    has_target: bool
    productive: float
    extra: float
    underperformance: Optional[float]
    base_amount: float
    incentive_amount: float
    penalty_amount: float
    total_amount: float

    @property
    def productive_hours(self) -> Optional[float]:
        return self.productive if self.mode == JobMode.HOURLY else None

    @property
    def extra_hours(self) -> Optional[float]:
        return self.extra if self.mode == JobMode.HOURLY else None

    @property
    def underperformance_hours(self) -> Optional[float]:
        return self.underperformance if self.mode == JobMode.HOURLY else None

    @property
    def productive_items(self) -> Optional[float]:
        return self.productive if self.mode == JobMode.ITEM else None

    @property
    def extra_items(self) -> Optional[float]:
        return self.extra if self.mode == JobMode.ITEM else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "hasTarget": self.has_target,
            "productive": self.productive,
            "extra": self.extra,
            "underperformance": self.underperformance,
            "productiveHours": self.productive_hours,
            "extraHours": self.extra_hours,
            "underperformanceHours": self.underperformance_hours,
            "productiveItems": self.productive_items,
            "extraItems": self.extra_items,
            "baseAmount": self.base_amount,
            "incentiveAmount": self.incentive_amount,
            "penaltyAmount": self.penalty_amount,
            "totalAmount": self.total_amount,
        }


@dataclass(frozen=True)
class JobEntry:
    """Flattened observation + result, in the shape the job-entry API stores."""

    job_id: int
    entry_type: EntryType
    worker_id: Optional[int]
    group_id: Optional[int]
    is_post_lunch: bool
    hours_taken: Optional[float]
    items_completed: Optional[float]
    rate_per_job: float
    expected_hours: Optional[float]
    productive_hours: Optional[float]
    extra_hours: Optional[float]
    underperformance_hours: Optional[float]
    incentive_amount: float
    total_amount: float
    remarks: Optional[str] = None
    entry_date: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobId": self.job_id,
            "entryType": self.entry_type.value,
            "workerId": self.worker_id,
            "groupId": self.group_id,
            "isPostLunch": self.is_post_lunch,
            "hoursTaken": self.hours_taken,
            "itemsCompleted": self.items_completed,
            "ratePerJob": self.rate_per_job,
            "expectedHours": self.expected_hours,
            "productiveHours": self.productive_hours,
            "extraHours": self.extra_hours,
            "underperformanceHours": self.underperformance_hours,
            "incentiveAmount": self.incentive_amount,
            "totalAmount": self.total_amount,
            "remarks": self.remarks,
            "entryDate": self.entry_date.isoformat() if self.entry_date else None,
        }
