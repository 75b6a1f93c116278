from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..analytics.buckets import LAST_30_DAYS, LAST_6_MONTHS, group_by, rank_top_n, sum_of, time_buckets
from ..analytics.model import AggregationConfig, TrendBucket, ViewModel
from ..analytics.rates import safe_ratio
from ..common.datetime_utils import subtract_months
from ..core.enums import ReportPeriod
from ..records.fields import label_or_unknown
from ..records.model import JobEntryReport

EARNINGS = "earnings"
HOURS = "hours"


def period_start(period: ReportPeriod, today: date) -> Optional[date]:
    """First excluded day of a look-back period (``None`` for all time)."""
    if period == ReportPeriod.WEEK:
        return today - timedelta(weeks=1)
    if period == ReportPeriod.MONTH:
        return subtract_months(today, 1)
    if period == ReportPeriod.QUARTER:
        return subtract_months(today, 3)
    if period == ReportPeriod.YEAR:
        return subtract_months(today, 12)
    return None


def within_period(entries: Sequence[JobEntryReport], period: ReportPeriod, today: date) -> list[JobEntryReport]:
    """Entries created after the period start; undated entries only survive ``all``."""
    start = period_start(period, today)
    if start is None:
        return list(entries)
    return [e for e in entries if e.created_at and e.created_at.date() > start]


@dataclass(frozen=True)
class WorkerEarningsRow:
    worker_name: str
    total_earnings: float
    total_jobs: int
    average_per_job: float
    total_hours: float


@dataclass(frozen=True)
class JobEarningsRow:
    job_name: str
    total_earnings: float
    total_jobs: int
    average_per_job: float


@dataclass(frozen=True)
class TopEarner:
    worker_name: str
    earnings: float
    jobs: int


@dataclass(frozen=True)
class EarningsReport(ViewModel):
    period: ReportPeriod
    total_earnings: float
    total_jobs: int
    average_per_job: float
    average_per_hour: float
    monthly_earnings: list[TrendBucket]
    worker_earnings: list[WorkerEarningsRow]
    job_type_earnings: list[JobEarningsRow]
    daily_earnings: list[TrendBucket]
    top_earners: list[TopEarner]


def build_earnings_report(
    entries: Sequence[JobEntryReport],
    config: AggregationConfig,
    *,
    period: ReportPeriod = ReportPeriod.ALL,
) -> EarningsReport:
    jobs = within_period(entries, period, config.today)
    unknown = config.unknown_label
    total_earnings = sum_of(jobs, lambda e: e.total_amount)
    total_hours = sum_of(jobs, lambda e: e.hours_taken)

    worker_rows = []
    for name, items in group_by(jobs, lambda e: label_or_unknown(e.worker_name, unknown)).items():
        earned = sum_of(items, lambda e: e.total_amount)
        worker_rows.append(
            WorkerEarningsRow(
                worker_name=name,
                total_earnings=earned,
                total_jobs=len(items),
                average_per_job=safe_ratio(earned, len(items)),
                total_hours=sum_of(items, lambda e: e.hours_taken),
            )
        )
    worker_rows = rank_top_n(worker_rows, metric=lambda w: w.total_earnings, n=None)

    job_rows = []
    for name, items in group_by(jobs, lambda e: label_or_unknown(e.job_name, unknown)).items():
        earned = sum_of(items, lambda e: e.total_amount)
        job_rows.append(
            JobEarningsRow(
                job_name=name,
                total_earnings=earned,
                total_jobs=len(items),
                average_per_job=safe_ratio(earned, len(items)),
            )
        )

    sums = {EARNINGS: lambda e: e.total_amount, HOURS: lambda e: e.hours_taken}

    def created_on(e: JobEntryReport) -> Optional[date]:
        return e.created_at.date() if e.created_at else None

    return EarningsReport(
        period=period,
        total_earnings=total_earnings,
        total_jobs=len(jobs),
        average_per_job=safe_ratio(total_earnings, len(jobs)),
        average_per_hour=safe_ratio(total_earnings, total_hours),
        monthly_earnings=time_buckets(
            jobs, date_of=created_on, window=LAST_6_MONTHS.resized(config.monthly_window), end=config.today, sums=sums
        ),
        worker_earnings=worker_rows,
        job_type_earnings=rank_top_n(job_rows, metric=lambda j: j.total_earnings, n=None),
        daily_earnings=time_buckets(
            jobs,
            date_of=created_on,
            window=LAST_30_DAYS.resized(config.earnings_daily_window),
            end=config.today,
            sums=sums,
        ),
        top_earners=[
            TopEarner(w.worker_name, w.total_earnings, w.total_jobs) for w in worker_rows[: config.top_workers]
        ],
    )
