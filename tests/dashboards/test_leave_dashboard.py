from __future__ import annotations

from datetime import date

import pytest

from src.workplus_analytics.workplus_analytics.analytics.model import AggregationConfig
from src.workplus_analytics.workplus_analytics.core.enums import AlertSeverity
from src.workplus_analytics.workplus_analytics.dashboards.leave import build_leave_analytics, build_leave_dashboard
from src.workplus_analytics.workplus_analytics.records.model import LeaveBalance, LeaveRequest

TODAY = date(2026, 3, 10)
CONFIG = AggregationConfig(today=TODAY)


def _req(id, status, days, applied, start=None, leave_type=None):
    return LeaveRequest(
        id=id,
        worker_id=id,
        status=status,
        total_days=days,
        applied_date=applied,
        start_date=start,
        leave_type_name=leave_type,
        worker_name=f"Worker {id}",
    )


REQUESTS = [
    _req(1, "Approved", 3, date(2026, 3, 10), date(2026, 3, 16), "Sick"),
    _req(2, "Pending", 1, date(2026, 3, 9), date(2026, 3, 17), "Casual"),
    _req(3, "Approved", 2, date(2026, 1, 15), date(2026, 1, 19), "Sick"),
    _req(4, "Rejected", 5, date(2025, 11, 20), date(2025, 11, 24), "Casual"),
    _req(5, "Approved", 1, date(2026, 2, 1)),
]
BALANCES = [
    LeaveBalance(worker_id=1, balance=5),
    LeaveBalance(worker_id=2, balance=1.5),
    LeaveBalance(worker_id=3, balance=0.5),
]


def test_lms_totals():
    view = build_leave_dashboard(REQUESTS, BALANCES, CONFIG)

    assert (view.total_requests, view.approved_requests, view.pending_requests, view.rejected_requests) == (5, 3, 1, 1)
    assert view.total_leave_days == 6
    assert view.average_leave_balance == pytest.approx(7 / 3)


def test_lms_trends():
    view = build_leave_dashboard(REQUESTS, BALANCES, CONFIG)

    assert len(view.request_trends) == 7
    assert view.request_trends[-1].category("Approved") == 1
    assert view.request_trends[-2].category("Pending") == 1

    monthly = {b.key: (b.count, b.total("approved_days")) for b in view.monthly_trends}
    assert list(monthly) == ["2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03"]
    assert monthly["2025-11"] == (1, 0)
    assert monthly["2026-03"] == (2, 3)
    assert monthly["2025-12"] == (0, 0)


def test_lms_leave_type_usage_falls_back_to_unknown():
    view = build_leave_dashboard(REQUESTS, BALANCES, CONFIG)

    assert [(u.name, u.requests, u.approved) for u in view.leave_type_usage] == [
        ("Sick", 2, 2),
        ("Casual", 2, 0),
        ("Unknown", 1, 1),
    ]


def test_lms_recent_activity_newest_first():
    view = build_leave_dashboard(REQUESTS, BALANCES, CONFIG)

    assert [a.id for a in view.recent_activity] == [1, 2, 5, 3, 4]
    assert view.recent_activity[0].action == "Approved - Sick"


def test_lms_low_balance_alert_only():
    view = build_leave_dashboard(REQUESTS, BALANCES, CONFIG)

    assert [(a.severity, a.message) for a in view.alerts] == [
        (AlertSeverity.INFO, "2 workers have low leave balance (< 2 days)"),
    ]


def test_lms_backlog_and_approval_alerts():
    pending = [_req(i, "Pending", 1, TODAY) for i in range(11)]
    view = build_leave_dashboard(pending, [], CONFIG)
    assert view.alerts[0].message == "11 leave requests pending approval"

    approved = [_req(i, "Approved", 1, TODAY) for i in range(5)]
    view = build_leave_dashboard(approved, [], CONFIG)
    assert view.alerts == [view.alerts[0]]
    assert view.alerts[0].message == "High approval rate: 100.0%"


def test_leave_analytics_for_year():
    view = build_leave_analytics(REQUESTS, CONFIG, year=2026)

    assert view.total_requests == 4
    assert view.approval_rate == 75.0
    assert len(view.monthly_trends) == 12
    assert view.monthly_trends[0].label == "Jan"
    assert view.peak_month.month == "Mar"
    assert view.peak_month.count == 2


def test_leave_analytics_breakdown_and_weekdays():
    view = build_leave_analytics(REQUESTS, CONFIG, year=2026)

    sick = view.leave_types[0]
    assert (sick.name, sick.total, sick.approved, sick.avg_duration) == ("Sick", 2, 2, 2.5)
    assert view.leave_types[1].avg_duration == 0

    weekdays = {p.label: p.value for p in view.day_of_week_distribution}
    assert weekdays["Monday"] == 2
    assert weekdays["Tuesday"] == 1
    assert weekdays["Sunday"] == 0


def test_leave_analytics_trend_direction():
    view = build_leave_analytics(REQUESTS, CONFIG, year=2026)

    assert view.recent_requests == 4
    assert view.previous_requests == 0
    assert view.trend_direction == "up"
    assert view.trend_change == 400.0


def test_leave_analytics_empty_year():
    view = build_leave_analytics(REQUESTS, CONFIG, year=2020)

    assert view.total_requests == 0
    assert view.approval_rate == 0
    assert view.peak_month.month == "None"
    assert view.trend_direction == "stable"
