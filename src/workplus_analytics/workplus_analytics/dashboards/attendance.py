from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Sequence

from ..analytics.alerts import AlertRule, evaluate_alerts
from ..analytics.buckets import LAST_7_DAYS, distribution, group_by, latest_first, rank_top_n, time_buckets
from ..analytics.model import AggregationConfig, Alert, ChartPoint, TrendBucket, ViewModel, chart_points
from ..analytics.rates import safe_rate
from ..core.constants import EVENING_SHIFT_HOURS, MORNING_SHIFT_HOURS
from ..core.enums import AlertSeverity, AttendanceStatus, ShiftSlot
from ..records.fields import label_or_unknown
from ..records.model import AttendanceRecord

STATUSES = tuple(s.value for s in AttendanceStatus)


@dataclass(frozen=True)
class WorkerAttendance:
    worker_id: Optional[int]
    worker_name: str
    present: int
    absent: int
    late: int
    on_leave: int
    total: int
    attendance_rate: float


@dataclass(frozen=True)
class ShiftShare:
    shift: ShiftSlot
    count: int
    percentage: float


@dataclass(frozen=True)
class AttendanceActivity:
    id: int
    worker_name: str
    action: str
    time: str
    status: str


@dataclass(frozen=True)
class AttendanceDashboard(ViewModel):
    present_today: int
    absent_today: int
    late_today: int
    on_leave_today: int
    total_workers: int
    attendance_rate: float
    daily_trends: list[TrendBucket]
    status_distribution: list[ChartPoint]
    worker_attendance: list[WorkerAttendance]
    shift_analysis: list[ShiftShare]
    recent_activity: list[AttendanceActivity]
    alerts: list[Alert]


ATTENDANCE_ALERT_RULES = (
    AlertRule(
        "high_absenteeism",
        lambda s: s["absent_today"] > s["total_workers"] * 0.2,
        AlertSeverity.WARNING,
        "High absenteeism today: {absent_today} workers absent",
    ),
    AlertRule(
        "late_arrivals",
        lambda s: s["late_today"] > s["total_workers"] * 0.1,
        AlertSeverity.WARNING,
        "{late_today} workers arrived late today",
    ),
    AlertRule(
        "excellent_attendance",
        lambda s: s["attendance_rate"] > 95,
        AlertSeverity.SUCCESS,
        "Excellent attendance rate: {attendance_rate:.1f}%",
    ),
)


def shift_for(check_in: Optional[time]) -> Optional[ShiftSlot]:
    """Classify a check-in by hour: Morning 06-14, Evening 14-22, otherwise Night."""
    if check_in is None:
        return None
    if MORNING_SHIFT_HOURS[0] <= check_in.hour < MORNING_SHIFT_HOURS[1]:
        return ShiftSlot.MORNING
    if EVENING_SHIFT_HOURS[0] <= check_in.hour < EVENING_SHIFT_HOURS[1]:
        return ShiftSlot.EVENING
    return ShiftSlot.NIGHT


def _count(records: Sequence[AttendanceRecord], status: AttendanceStatus) -> int:
    return sum(1 for r in records if r.status == status.value)


def _worker_attendance(records: Sequence[AttendanceRecord], config: AggregationConfig) -> list[WorkerAttendance]:
    rows = []
    for worker_id, marks in group_by(records, lambda r: r.worker_id).items():
        present = _count(marks, AttendanceStatus.PRESENT)
        rows.append(
            WorkerAttendance(
                worker_id=worker_id,
                worker_name=label_or_unknown(marks[0].worker_name, config.unknown_label),
                present=present,
                absent=_count(marks, AttendanceStatus.ABSENT),
                late=_count(marks, AttendanceStatus.LATE),
                on_leave=_count(marks, AttendanceStatus.ON_LEAVE),
                total=len(marks),
                attendance_rate=safe_rate(present, len(marks)),
            )
        )
    return rank_top_n(rows, metric=lambda w: w.attendance_rate, n=config.chart_workers)


def _shift_analysis(records: Sequence[AttendanceRecord]) -> list[ShiftShare]:
    shifts = [shift_for(r.check_in_time) for r in records]
    return [
        ShiftShare(
            shift=slot,
            count=shifts.count(slot),
            percentage=safe_rate(shifts.count(slot), len(records)),
        )
        for slot in ShiftSlot
    ]


def build_attendance_dashboard(records: Sequence[AttendanceRecord], config: AggregationConfig) -> AttendanceDashboard:
    """Daily attendance overview: today's counts, 7-day trend, shifts and alerts."""
    today_records = [r for r in records if r.attendance_date == config.today]
    present_today = _count(today_records, AttendanceStatus.PRESENT)
    total_workers = len({r.worker_id for r in records if r.worker_id is not None})

    stats = {
        "present_today": present_today,
        "absent_today": _count(today_records, AttendanceStatus.ABSENT),
        "late_today": _count(today_records, AttendanceStatus.LATE),
        "on_leave_today": _count(today_records, AttendanceStatus.ON_LEAVE),
        "total_workers": total_workers,
        "attendance_rate": safe_rate(present_today, total_workers),
    }

    daily_trends = time_buckets(
        records,
        date_of=lambda r: r.attendance_date,
        window=LAST_7_DAYS.resized(config.daily_window),
        end=config.today,
        category_of=lambda r: r.status,
        categories=STATUSES,
        unknown=config.unknown_label,
    )
    status_slices = distribution(
        records,
        label_of=lambda r: r.status,
        unknown=config.unknown_label,
    )

    recent = [
        AttendanceActivity(
            id=r.id,
            worker_name=label_or_unknown(r.worker_name, config.unknown_label),
            action=f"Marked {r.status}",
            time=r.created_at.strftime("%H:%M") if r.created_at else config.unknown_label,
            status=r.status,
        )
        for r in latest_first(records, stamp_of=lambda r: r.created_at, n=config.recent_limit)
    ]

    return AttendanceDashboard(
        **stats,
        daily_trends=daily_trends,
        status_distribution=chart_points(status_slices),
        worker_attendance=_worker_attendance(records, config),
        shift_analysis=_shift_analysis(records),
        recent_activity=recent,
        alerts=evaluate_alerts(ATTENDANCE_ALERT_RULES, stats),
    )
