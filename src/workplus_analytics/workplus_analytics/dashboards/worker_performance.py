"""Per-worker performance views.

Two flavours exist: the production view scores a worker from job-entry
earnings, the HR view from attendance, leave and punctuality. Both use a
``ScoreWeights`` configuration and rate the result with fixed bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..analytics.buckets import LAST_6_MONTHS, distribution, latest_first, sum_of, time_buckets
from ..analytics.model import AggregationConfig, DistributionSlice, TrendBucket, ViewModel
from ..analytics.rates import safe_rate, safe_ratio
from ..analytics.scoring import (
    HR_PERFORMANCE_WEIGHTS,
    HR_RATING_BANDS,
    PRODUCTIVITY_RATING_BANDS,
    PRODUCTIVITY_WEIGHTS,
    composite_score,
)
from ..common.datetime_utils import months_between
from ..core.enums import AttendanceStatus, RequestStatus
from ..records.fields import label_or_unknown
from ..records.model import AttendanceRecord, JobEntryReport, LeaveBalance, LeaveRequest, Worker

EARNINGS = "earnings"
HOURS = "hours"


def _created_on(entry: JobEntryReport) -> Optional[date]:
    return entry.created_at.date() if entry.created_at else None


@dataclass(frozen=True)
class WorkerActivity:
    date: str
    job_name: str
    amount: float
    hours: float


@dataclass(frozen=True)
class ProductionMetrics:
    worker_name: str
    total_jobs: int
    total_earnings: float
    total_hours: float
    average_per_job: float
    average_hourly_rate: float
    jobs_per_month: float
    productivity_score: float
    rating: str
    monthly_trends: list[TrendBucket]
    job_distribution: list[DistributionSlice]
    recent_activity: list[WorkerActivity]


@dataclass(frozen=True)
class WorkerPerformanceReport(ViewModel):
    worker_options: list[str]
    selected_worker: Optional[str]
    metrics: Optional[ProductionMetrics]


def worker_options(entries: Sequence[JobEntryReport]) -> list[str]:
    return sorted({e.worker_name for e in entries if e.worker_name})


def _production_metrics(name: str, entries: Sequence[JobEntryReport], config: AggregationConfig) -> ProductionMetrics:
    total_jobs = len(entries)
    total_earnings = sum_of(entries, lambda e: e.total_amount)
    total_hours = sum_of(entries, lambda e: e.hours_taken)
    hourly_rate = safe_ratio(total_earnings, total_hours)

    dated = [d for d in (_created_on(e) for e in entries) if d is not None]
    active_months = months_between(min(dated), config.today) if dated else 0.0
    jobs_per_month = total_jobs / max(1.0, active_months)

    score = composite_score(
        {"hourly_rate": hourly_rate, "jobs_per_month": jobs_per_month, "total_earnings": total_earnings},
        PRODUCTIVITY_WEIGHTS,
    )
    recent = [
        WorkerActivity(
            date=e.created_at.strftime("%d/%m/%Y"),
            job_name=label_or_unknown(e.job_name, config.unknown_label),
            amount=e.amount,
            hours=e.hours,
        )
        for e in latest_first([e for e in entries if e.created_at], stamp_of=lambda e: e.created_at, n=config.recent_limit)
    ]

    return ProductionMetrics(
        worker_name=name,
        total_jobs=total_jobs,
        total_earnings=total_earnings,
        total_hours=total_hours,
        average_per_job=safe_ratio(total_earnings, total_jobs),
        average_hourly_rate=hourly_rate,
        jobs_per_month=jobs_per_month,
        productivity_score=score,
        rating=PRODUCTIVITY_RATING_BANDS.rate(score),
        monthly_trends=time_buckets(
            entries,
            date_of=_created_on,
            window=LAST_6_MONTHS.resized(config.monthly_window),
            end=config.today,
            sums={EARNINGS: lambda e: e.total_amount, HOURS: lambda e: e.hours_taken},
        ),
        job_distribution=distribution(entries, label_of=lambda e: e.job_name, unknown=config.unknown_label),
        recent_activity=recent,
    )


def build_worker_performance(
    entries: Sequence[JobEntryReport],
    config: AggregationConfig,
    *,
    worker_name: Optional[str] = None,
) -> WorkerPerformanceReport:
    """Production performance of one worker, selected by name.

    ``metrics`` is ``None`` when no worker is selected or the worker has no
    entries.
    """
    options = worker_options(entries)
    mine = [e for e in entries if worker_name and e.worker_name == worker_name]
    return WorkerPerformanceReport(
        worker_options=options,
        selected_worker=worker_name,
        metrics=_production_metrics(worker_name, mine, config) if mine else None,
    )


@dataclass(frozen=True)
class LeavePattern:
    type: str
    days: float
    frequency: int


@dataclass(frozen=True)
class HRWorkerPerformance(ViewModel):
    worker: Optional[Worker]
    attendance_rate: float
    total_days_worked: int
    total_absent: int
    total_late: int
    total_leaves_taken: float
    leave_balance: float
    performance_score: float
    rating: str
    monthly_attendance: list[TrendBucket]
    leave_pattern: list[LeavePattern]


def build_hr_worker_performance(
    attendance: Sequence[AttendanceRecord],
    requests: Sequence[LeaveRequest],
    balances: Sequence[LeaveBalance],
    config: AggregationConfig,
    *,
    workers: Sequence[Worker] = (),
    worker_id: Optional[int] = None,
) -> HRWorkerPerformance:
    """HR score for one worker: attendance, leave utilisation and punctuality.

    Without ``worker_id`` the first known worker is used; when there are no
    workers either, all records are scored together.
    """
    if worker_id is None and workers:
        worker_id = workers[0].worker_id
    worker = next((w for w in workers if w.worker_id == worker_id), None)

    def mine(records):
        return [r for r in records if worker_id is None or r.worker_id == worker_id]

    marks = mine(attendance)
    approved = [r for r in mine(requests) if r.status == RequestStatus.APPROVED.value]

    total_days = len(marks)
    present = sum(1 for m in marks if m.status == AttendanceStatus.PRESENT.value)
    late = sum(1 for m in marks if m.status == AttendanceStatus.LATE.value)
    leaves_taken = sum_of(approved, lambda r: r.total_days)
    attendance_rate = safe_rate(present, total_days)

    score = composite_score(
        {
            "attendance_rate": attendance_rate,
            "leave_days": leaves_taken,
            "late_rate": safe_rate(late, total_days),
        },
        HR_PERFORMANCE_WEIGHTS,
    )

    monthly = time_buckets(
        marks,
        date_of=lambda m: m.attendance_date,
        window=LAST_6_MONTHS.resized(config.monthly_window),
        end=config.today,
        category_of=lambda m: m.status,
        categories=tuple(s.value for s in AttendanceStatus),
        unknown=config.unknown_label,
    )
    pattern = [
        LeavePattern(type=s.label, days=s.total, frequency=s.count)
        for s in distribution(
            approved,
            label_of=lambda r: r.leave_type_name,
            value_of=lambda r: r.total_days,
            drop_zero=False,
            unknown=config.unknown_label,
        )
    ]

    return HRWorkerPerformance(
        worker=worker,
        attendance_rate=attendance_rate,
        total_days_worked=present,
        total_absent=sum(1 for m in marks if m.status == AttendanceStatus.ABSENT.value),
        total_late=late,
        total_leaves_taken=leaves_taken,
        leave_balance=sum_of(mine(balances), lambda b: b.balance),
        performance_score=score,
        rating=HR_RATING_BANDS.rate(score),
        monthly_attendance=monthly,
        leave_pattern=pattern,
    )
