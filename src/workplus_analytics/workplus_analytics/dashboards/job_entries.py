from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional, Sequence

from ..analytics.alerts import AlertRule, evaluate_alerts
from ..analytics.buckets import LAST_7_DAYS, distribution, group_by, latest_first, rank_top_n, sum_of, time_buckets
from ..analytics.model import (
    AggregationConfig,
    Alert,
    ChartPoint,
    Comparison,
    TargetProgress,
    TrendBucket,
    ViewModel,
    truncate_label,
)
from ..analytics.rates import safe_rate, safe_ratio
from ..core.constants import (
    AVAILABLE_LABEL,
    DAILY_EARNINGS_TARGET,
    DAILY_HOURS_TARGET,
    NO_RECENT_ACTIVITY,
    OVERRUN_ALERT_FACTOR,
    WEEKLY_EARNINGS_TARGET,
    WEEKLY_HOURS_TARGET,
)
from ..core.enums import AlertSeverity
from ..records.fields import label_or_unknown
from ..records.model import JobEntryReport, Worker

AMOUNT = "amount"
HOURS = "hours"


@dataclass(frozen=True)
class WorkerEarnings:
    name: str
    total_amount: float
    total_hours: float
    job_count: int
    efficiency: float


@dataclass(frozen=True)
class WorkerChartBar:
    worker: str
    earnings: float
    hours: float
    jobs: int


@dataclass(frozen=True)
class JobCount:
    job: str
    count: int


@dataclass(frozen=True)
class ShiftSplit:
    shift: str
    entries: int
    percentage: float


@dataclass(frozen=True)
class EntryActivity:
    worker: str
    job: str
    amount: float
    hours: float
    time: str
    efficiency: int


@dataclass(frozen=True)
class DayComparison:
    earnings: Comparison
    hours: Comparison
    jobs: Comparison


@dataclass(frozen=True)
class WorkerStatus:
    name: str
    current_job: str
    last_activity: str
    status: str


@dataclass(frozen=True)
class TimeEfficiency:
    job: str
    worker: str
    expected: float
    actual: float
    efficiency: int
    variance: float


@dataclass(frozen=True)
class Targets:
    daily_earnings: TargetProgress
    weekly_earnings: TargetProgress
    daily_hours: TargetProgress
    weekly_hours: TargetProgress


@dataclass(frozen=True)
class JobEntryDashboard(ViewModel):
    total_records: int
    total_amount: float
    total_hours: float
    average_efficiency: float
    top_workers: list[WorkerEarnings]
    job_distribution: list[JobCount]
    worker_performance: list[WorkerChartBar]
    job_distribution_chart: list[ChartPoint]
    daily_trends: list[TrendBucket]
    efficiency_analysis: list[ShiftSplit]
    recent_activity: list[EntryActivity]
    alerts: list[Alert]
    comparisons: DayComparison
    worker_status: list[WorkerStatus]
    time_efficiency: list[TimeEfficiency]
    targets: Targets


# Evaluated once per entry; the stats are the entry's own fields.
ENTRY_ALERT_RULES = (
    AlertRule(
        "hours_overrun",
        lambda e: bool(e["hours"] and e["expected"]) and e["hours"] > e["expected"] * OVERRUN_ALERT_FACTOR,
        AlertSeverity.WARNING,
        "{worker} took {hours:g}h vs expected {expected:g}h on {job}",
    ),
    AlertRule(
        "missing_amount",
        lambda e: not e["amount"],
        AlertSeverity.ERROR,
        "Missing amount data for {worker} - {job}",
    ),
)


def _entry_stats(entry: JobEntryReport, unknown: str) -> dict[str, Any]:
    return {
        "worker": label_or_unknown(entry.worker_name, unknown),
        "job": label_or_unknown(entry.job_name, unknown),
        "hours": entry.hours_taken or 0.0,
        "expected": entry.expected_hours or 0.0,
        "amount": entry.total_amount or 0.0,
    }


def entry_efficiency(entry: JobEntryReport) -> int:
    """Expected vs actual hours as a whole percentage; 0 when either is missing."""
    if not entry.hours_taken or not entry.expected_hours:
        return 0
    return round(entry.expected_hours / entry.hours_taken * 100)


def _worker_earnings(entries: Sequence[JobEntryReport], unknown: str) -> list[WorkerEarnings]:
    rows = []
    for name, items in group_by(entries, lambda e: label_or_unknown(e.worker_name, unknown)).items():
        hours = sum_of(items, lambda e: e.hours_taken)
        rows.append(
            WorkerEarnings(
                name=name,
                total_amount=sum_of(items, lambda e: e.total_amount),
                total_hours=hours,
                job_count=len(items),
                efficiency=safe_rate(sum_of(items, lambda e: e.productive_hours), hours),
            )
        )
    return rank_top_n(rows, metric=lambda w: w.total_amount, n=None)


def _comparison(entries: Sequence[JobEntryReport], config: AggregationConfig) -> DayComparison:
    yesterday = config.today - timedelta(days=1)
    today_entries = [e for e in entries if e.created_at and e.created_at.date() == config.today]
    yesterday_entries = [e for e in entries if e.created_at and e.created_at.date() == yesterday]
    return DayComparison(
        earnings=Comparison(
            today=sum_of(today_entries, lambda e: e.total_amount),
            yesterday=sum_of(yesterday_entries, lambda e: e.total_amount),
        ),
        hours=Comparison(
            today=sum_of(today_entries, lambda e: e.hours_taken),
            yesterday=sum_of(yesterday_entries, lambda e: e.hours_taken),
        ),
        jobs=Comparison(today=len(today_entries), yesterday=len(yesterday_entries)),
    )


def _worker_status(
    entries: Sequence[JobEntryReport], workers: Sequence[Worker], config: AggregationConfig
) -> list[WorkerStatus]:
    by_name = group_by(entries, lambda e: e.worker_name)
    statuses = []
    for worker in workers[: config.distribution_top_k]:
        latest = latest_first(by_name.get(worker.full_name, []), stamp_of=lambda e: e.created_at, n=1)
        entry: Optional[JobEntryReport] = latest[0] if latest else None
        statuses.append(
            WorkerStatus(
                name=worker.full_name,
                current_job=(entry.job_name if entry else None) or AVAILABLE_LABEL,
                last_activity=entry.created_at.strftime("%H:%M:%S") if entry and entry.created_at else NO_RECENT_ACTIVITY,
                status="working" if entry else "available",
            )
        )
    return statuses


def _time_efficiency(entries: Sequence[JobEntryReport], config: AggregationConfig) -> list[TimeEfficiency]:
    rows = [
        TimeEfficiency(
            job=label_or_unknown(e.job_name, config.unknown_label),
            worker=label_or_unknown(e.worker_name, config.unknown_label),
            expected=e.expected_hours,
            actual=e.hours_taken,
            efficiency=entry_efficiency(e),
            variance=e.hours_taken - e.expected_hours,
        )
        for e in entries
        if e.hours_taken and e.expected_hours
    ]
    rows.sort(key=lambda t: t.efficiency)
    return rows[: config.distribution_top_k]


def _progress(target: float, actual: float) -> TargetProgress:
    return TargetProgress(target=target, actual=actual, percentage=safe_rate(actual, target))


def build_job_entry_dashboard(
    entries: Sequence[JobEntryReport],
    config: AggregationConfig,
    *,
    workers: Sequence[Worker] = (),
) -> JobEntryDashboard:
    """Production overview over stored job entries.

    ``workers`` feeds the worker status panel; it may be empty.
    """
    unknown = config.unknown_label
    total_records = len(entries)
    total_amount = sum_of(entries, lambda e: e.total_amount)
    # Hours fall back to the target when the entry was item based.
    total_hours = sum_of(entries, lambda e: e.hours_taken or e.expected_hours)

    workers_ranked = _worker_earnings(entries, unknown)
    job_slices = distribution(entries, label_of=lambda e: e.job_name, unknown=unknown)

    post_lunch = sum(1 for e in entries if e.is_post_lunch)
    efficiency_analysis = [
        ShiftSplit("Morning", total_records - post_lunch, safe_rate(total_records - post_lunch, total_records)),
        ShiftSplit("Evening", post_lunch, safe_rate(post_lunch, total_records)),
    ]

    alerts: list[Alert] = []
    for entry in entries:
        alerts.extend(evaluate_alerts(ENTRY_ALERT_RULES, _entry_stats(entry, unknown)))

    recent = [
        EntryActivity(
            worker=label_or_unknown(e.worker_name, unknown),
            job=label_or_unknown(e.job_name, unknown),
            amount=e.amount,
            hours=e.hours,
            time=e.created_at.strftime("%H:%M:%S") if e.created_at else unknown,
            efficiency=entry_efficiency(e),
        )
        for e in latest_first(entries, stamp_of=lambda e: e.created_at, n=config.recent_limit)
    ]

    comparisons = _comparison(entries, config)
    weekly_hours = sum_of(entries, lambda e: e.hours_taken)

    return JobEntryDashboard(
        total_records=total_records,
        total_amount=total_amount,
        total_hours=total_hours,
        average_efficiency=safe_ratio(total_amount, total_hours),
        top_workers=workers_ranked[: config.top_workers],
        job_distribution=[JobCount(s.label, s.count) for s in job_slices[: config.job_distribution_top_k]],
        worker_performance=[
            WorkerChartBar(truncate_label(w.name, 8), w.total_amount, w.total_hours, w.job_count)
            for w in workers_ranked[: config.chart_workers]
        ],
        job_distribution_chart=[
            ChartPoint(truncate_label(s.label, 12), s.count) for s in job_slices[: config.distribution_top_k]
        ],
        daily_trends=time_buckets(
            entries,
            date_of=lambda e: e.created_at.date() if e.created_at else None,
            window=LAST_7_DAYS.resized(config.daily_window),
            end=config.today,
            sums={AMOUNT: lambda e: e.total_amount, HOURS: lambda e: e.hours_taken},
        ),
        efficiency_analysis=efficiency_analysis,
        recent_activity=recent,
        alerts=alerts[: config.alert_limit],
        comparisons=comparisons,
        worker_status=_worker_status(entries, workers, config),
        time_efficiency=_time_efficiency(entries, config),
        targets=Targets(
            daily_earnings=_progress(DAILY_EARNINGS_TARGET, comparisons.earnings.today),
            weekly_earnings=_progress(WEEKLY_EARNINGS_TARGET, total_amount),
            daily_hours=_progress(DAILY_HOURS_TARGET, comparisons.hours.today),
            weekly_hours=_progress(WEEKLY_HOURS_TARGET, weekly_hours),
        ),
    )
