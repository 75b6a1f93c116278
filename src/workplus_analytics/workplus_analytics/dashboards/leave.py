"""Leave management views: the LMS dashboard and yearly leave analytics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..analytics.alerts import AlertRule, evaluate_alerts
from ..analytics.buckets import (
    CALENDAR_YEAR,
    LAST_6_MONTHS,
    LAST_7_DAYS,
    distribution,
    group_by,
    latest_first,
    rank_top_n,
    sum_of,
    time_buckets,
)
from ..analytics.model import AggregationConfig, Alert, ChartPoint, TrendBucket, ViewModel, chart_points
from ..analytics.rates import safe_rate, safe_ratio
from ..common.datetime_utils import start_of_day, subtract_months
from ..core.constants import LOW_LEAVE_BALANCE_DAYS, NONE_LABEL
from ..core.enums import AlertSeverity, RequestStatus
from ..records.fields import label_or_unknown
from ..records.model import LeaveBalance, LeaveRequest

STATUSES = tuple(s.value for s in RequestStatus)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
APPROVED_DAYS = "approved_days"


def _count(requests: Sequence[LeaveRequest], status: RequestStatus) -> int:
    return sum(1 for r in requests if r.status == status.value)


def _approved_days(request: LeaveRequest) -> float:
    return request.total_days if request.status == RequestStatus.APPROVED.value else 0.0


@dataclass(frozen=True)
class LeaveTypeUsage:
    name: str
    requests: int
    total_days: float
    approved: int


@dataclass(frozen=True)
class LeaveActivity:
    id: int
    worker_name: str
    action: str
    date: str
    status: str
    days: float


@dataclass(frozen=True)
class LeaveDashboard(ViewModel):
    total_requests: int
    pending_requests: int
    approved_requests: int
    rejected_requests: int
    total_leave_days: float
    average_leave_balance: float
    request_trends: list[TrendBucket]
    status_distribution: list[ChartPoint]
    leave_type_usage: list[LeaveTypeUsage]
    monthly_trends: list[TrendBucket]
    recent_activity: list[LeaveActivity]
    alerts: list[Alert]


LEAVE_ALERT_RULES = (
    AlertRule(
        "pending_backlog",
        lambda s: s["pending_requests"] > 10,
        AlertSeverity.WARNING,
        "{pending_requests} leave requests pending approval",
    ),
    AlertRule(
        "low_balances",
        lambda s: s["low_balance_workers"] > 0,
        AlertSeverity.INFO,
        "{low_balance_workers} workers have low leave balance (< {low_balance_days} days)",
    ),
    AlertRule(
        "high_approval_rate",
        lambda s: s["approved_requests"] > s["total_requests"] * 0.8,
        AlertSeverity.SUCCESS,
        "High approval rate: {approval_rate:.1f}%",
    ),
)


def _leave_type_usage(requests: Sequence[LeaveRequest], config: AggregationConfig) -> list[LeaveTypeUsage]:
    usage = [
        LeaveTypeUsage(
            name=name,
            requests=len(items),
            total_days=sum_of(items, lambda r: r.total_days),
            approved=_count(items, RequestStatus.APPROVED),
        )
        for name, items in group_by(
            requests, lambda r: label_or_unknown(r.leave_type_name, config.unknown_label)
        ).items()
    ]
    return rank_top_n(usage, metric=lambda u: u.requests, n=config.distribution_top_k)


def build_leave_dashboard(
    requests: Sequence[LeaveRequest],
    balances: Sequence[LeaveBalance],
    config: AggregationConfig,
) -> LeaveDashboard:
    total = len(requests)
    approved = _count(requests, RequestStatus.APPROVED)
    stats = {
        "total_requests": total,
        "pending_requests": _count(requests, RequestStatus.PENDING),
        "approved_requests": approved,
        "rejected_requests": _count(requests, RequestStatus.REJECTED),
        "approval_rate": safe_rate(approved, total),
        "low_balance_workers": sum(1 for b in balances if b.balance < LOW_LEAVE_BALANCE_DAYS),
        "low_balance_days": LOW_LEAVE_BALANCE_DAYS,
    }

    request_trends = time_buckets(
        requests,
        date_of=lambda r: r.applied_date,
        window=LAST_7_DAYS.resized(config.daily_window),
        end=config.today,
        category_of=lambda r: r.status,
        categories=STATUSES,
        unknown=config.unknown_label,
    )
    monthly_trends = time_buckets(
        requests,
        date_of=lambda r: r.applied_date,
        window=LAST_6_MONTHS.resized(config.monthly_window),
        end=config.today,
        sums={APPROVED_DAYS: _approved_days},
    )
    status_slices = distribution(
        requests, label_of=lambda r: r.status, unknown=config.unknown_label
    )

    recent = [
        LeaveActivity(
            id=r.id,
            worker_name=label_or_unknown(r.worker_name, config.unknown_label),
            action=f"{r.status} - {label_or_unknown(r.leave_type_name, config.unknown_label)}",
            date=r.applied_date.strftime("%d/%m") if r.applied_date else config.unknown_label,
            status=r.status,
            days=r.total_days,
        )
        for r in latest_first(
            requests, stamp_of=lambda r: start_of_day(r.applied_date), n=config.recent_limit
        )
    ]

    return LeaveDashboard(
        total_requests=total,
        pending_requests=stats["pending_requests"],
        approved_requests=approved,
        rejected_requests=stats["rejected_requests"],
        total_leave_days=sum_of(requests, _approved_days),
        average_leave_balance=safe_ratio(sum_of(balances, lambda b: b.balance), len(balances)),
        request_trends=request_trends,
        status_distribution=chart_points(status_slices),
        leave_type_usage=_leave_type_usage(requests, config),
        monthly_trends=monthly_trends,
        recent_activity=recent,
        alerts=evaluate_alerts(LEAVE_ALERT_RULES, stats),
    )


@dataclass(frozen=True)
class LeaveTypeBreakdown:
    name: str
    total: int
    approved: int
    rejected: int
    pending: int
    total_days: float
    avg_duration: float


@dataclass(frozen=True)
class PeakMonth:
    month: str
    count: int


@dataclass(frozen=True)
class LeaveAnalytics(ViewModel):
    year: int
    total_requests: int
    approved_requests: int
    pending_requests: int
    rejected_requests: int
    approval_rate: float
    leave_types: list[LeaveTypeBreakdown]
    monthly_trends: list[TrendBucket]
    peak_month: PeakMonth
    day_of_week_distribution: list[ChartPoint]
    recent_requests: int
    previous_requests: int
    trend_direction: str
    trend_change: float


def _recent_vs_previous(requests: Sequence[LeaveRequest], today: date) -> tuple[int, int]:
    """Requests applied in the last three months vs the three months before."""
    recent_start = subtract_months(today, 3)
    previous_start = subtract_months(today, 6)
    recent = sum(1 for r in requests if r.applied_date and r.applied_date > recent_start)
    previous = sum(1 for r in requests if r.applied_date and previous_start < r.applied_date < recent_start)
    return recent, previous


def build_leave_analytics(
    requests: Sequence[LeaveRequest],
    config: AggregationConfig,
    *,
    year: Optional[int] = None,
) -> LeaveAnalytics:
    """Year-scoped leave analytics: per-type breakdown, seasonality and momentum."""
    year = year or config.today.year
    in_year = [r for r in requests if r.applied_date and r.applied_date.year == year]
    total = len(in_year)
    approved = _count(in_year, RequestStatus.APPROVED)

    leave_types = []
    for name, items in group_by(in_year, lambda r: label_or_unknown(r.leave_type_name, config.unknown_label)).items():
        type_approved = _count(items, RequestStatus.APPROVED)
        total_days = sum_of(items, lambda r: r.total_days)
        leave_types.append(
            LeaveTypeBreakdown(
                name=name,
                total=len(items),
                approved=type_approved,
                rejected=_count(items, RequestStatus.REJECTED),
                pending=_count(items, RequestStatus.PENDING),
                total_days=total_days,
                avg_duration=safe_ratio(total_days, type_approved),
            )
        )

    monthly_trends = time_buckets(
        in_year,
        date_of=lambda r: r.applied_date,
        window=CALENDAR_YEAR,
        end=date(year, 12, 1),
        category_of=lambda r: r.status,
        categories=STATUSES,
        sums={APPROVED_DAYS: _approved_days},
        unknown=config.unknown_label,
    )

    peak = PeakMonth(month=NONE_LABEL, count=0)
    for bucket in monthly_trends:
        if bucket.count > peak.count:
            peak = PeakMonth(month=bucket.label, count=bucket.count)

    weekdays = {day: 0 for day in WEEKDAYS}
    for r in in_year:
        if r.start_date:
            weekdays[WEEKDAYS[r.start_date.weekday()]] += 1

    recent, previous = _recent_vs_previous(in_year, config.today)
    if recent > previous:
        direction = "up"
    elif recent < previous:
        direction = "down"
    else:
        direction = "stable"

    return LeaveAnalytics(
        year=year,
        total_requests=total,
        approved_requests=approved,
        pending_requests=_count(in_year, RequestStatus.PENDING),
        rejected_requests=_count(in_year, RequestStatus.REJECTED),
        approval_rate=safe_rate(approved, total),
        leave_types=leave_types,
        monthly_trends=monthly_trends,
        peak_month=peak,
        day_of_week_distribution=[ChartPoint(label=day, value=count) for day, count in weekdays.items()],
        recent_requests=recent,
        previous_requests=previous,
        trend_direction=direction,
        trend_change=(recent - previous) / max(previous, 1) * 100,
    )
