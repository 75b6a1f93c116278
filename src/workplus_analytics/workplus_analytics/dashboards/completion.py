from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..analytics.buckets import LAST_6_MONTHS, group_by, latest_first, rank_top_n, sum_of, time_buckets
from ..analytics.model import AggregationConfig, TrendBucket, ViewModel
from ..analytics.rates import safe_rate, safe_ratio
from ..core.enums import CompletionStatus, ReportPeriod
from ..records.fields import label_or_unknown
from ..records.model import JobEntryReport
from .earnings import within_period

STATUSES = tuple(s.value for s in CompletionStatus)


def completion_status(entry: JobEntryReport) -> CompletionStatus:
    """An entry is completed once it has both a payable amount and logged work."""
    worked = entry.hours_taken or entry.items_completed
    if entry.total_amount and entry.total_amount > 0 and worked and worked > 0:
        return CompletionStatus.COMPLETED
    return CompletionStatus.PENDING


def _is_completed(entry: JobEntryReport) -> bool:
    return completion_status(entry) == CompletionStatus.COMPLETED


@dataclass(frozen=True)
class CompletionRow:
    name: str
    total: int
    completed: int
    rate: float


@dataclass(frozen=True)
class RecentCompletion:
    date: str
    job_name: str
    worker_name: str
    status: CompletionStatus
    amount: float


@dataclass(frozen=True)
class JobCompletionReport(ViewModel):
    period: ReportPeriod
    total_jobs: int
    completed_jobs: int
    pending_jobs: int
    completion_rate: float
    average_completion_time: float
    monthly_trends: list[TrendBucket]
    job_type_completion: list[CompletionRow]
    worker_completion: list[CompletionRow]
    recent_completions: list[RecentCompletion]


def _completion_rows(jobs: Sequence[JobEntryReport], key_of, unknown: str) -> list[CompletionRow]:
    rows = []
    for name, items in group_by(jobs, lambda e: label_or_unknown(key_of(e), unknown)).items():
        completed = sum(1 for e in items if _is_completed(e))
        rows.append(CompletionRow(name=name, total=len(items), completed=completed, rate=safe_rate(completed, len(items))))
    return rows


def build_job_completion_report(
    entries: Sequence[JobEntryReport],
    config: AggregationConfig,
    *,
    period: ReportPeriod = ReportPeriod.ALL,
) -> JobCompletionReport:
    jobs = within_period(entries, period, config.today)
    unknown = config.unknown_label
    completed = [e for e in jobs if _is_completed(e)]

    def created_on(e: JobEntryReport) -> Optional[date]:
        return e.created_at.date() if e.created_at else None

    recent = [
        RecentCompletion(
            date=e.created_at.strftime("%d/%m/%Y"),
            job_name=label_or_unknown(e.job_name, unknown),
            worker_name=label_or_unknown(e.worker_name, unknown),
            status=completion_status(e),
            amount=e.amount,
        )
        for e in latest_first([e for e in jobs if e.created_at], stamp_of=lambda e: e.created_at, n=config.recent_limit)
    ]

    return JobCompletionReport(
        period=period,
        total_jobs=len(jobs),
        completed_jobs=len(completed),
        pending_jobs=len(jobs) - len(completed),
        completion_rate=safe_rate(len(completed), len(jobs)),
        average_completion_time=safe_ratio(sum_of(completed, lambda e: e.hours_taken), len(completed)),
        monthly_trends=time_buckets(
            jobs,
            date_of=created_on,
            window=LAST_6_MONTHS.resized(config.monthly_window),
            end=config.today,
            category_of=lambda e: completion_status(e).value,
            categories=STATUSES,
        ),
        job_type_completion=rank_top_n(_completion_rows(jobs, lambda e: e.job_name, unknown), metric=lambda r: r.total, n=None),
        worker_completion=rank_top_n(
            _completion_rows(jobs, lambda e: e.worker_name, unknown), metric=lambda r: r.rate, n=None
        ),
        recent_completions=recent,
    )
