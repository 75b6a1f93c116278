from __future__ import annotations

from datetime import date, datetime

import pytest

from src.workplus_analytics.workplus_analytics.analytics.model import AggregationConfig
from src.workplus_analytics.workplus_analytics.core.enums import AlertSeverity
from src.workplus_analytics.workplus_analytics.dashboards.job_entries import build_job_entry_dashboard
from src.workplus_analytics.workplus_analytics.records.model import JobEntryReport, Worker

TODAY = date(2026, 3, 10)
CONFIG = AggregationConfig(today=TODAY)

ENTRIES = [
    JobEntryReport(
        entry_id=1, worker_name="Alice", job_name="Cutting", hours_taken=10, expected_hours=8,
        productive_hours=8, total_amount=1100, created_at=datetime(2026, 3, 10, 9, 0),
    ),
    JobEntryReport(
        entry_id=2, worker_name="Bob", job_name="Cutting", hours_taken=6, expected_hours=8,
        productive_hours=6, total_amount=560, is_post_lunch=True, created_at=datetime(2026, 3, 10, 14, 0),
    ),
    JobEntryReport(
        entry_id=3, worker_name="Alice", job_name="Packing", items_completed=50, total_amount=270,
        created_at=datetime(2026, 3, 9, 10, 0),
    ),
    JobEntryReport(
        entry_id=4, worker_name="Carol", job_name="Sewing", hours_taken=4, expected_hours=3,
        total_amount=0, created_at=datetime(2026, 3, 1, 8, 0),
    ),
    JobEntryReport(entry_id=5, job_name="Cutting", hours_taken=2, expected_hours=2, total_amount=200),
]


def test_totals_and_earnings_per_hour():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert view.total_records == 5
    assert view.total_amount == 2130
    assert view.total_hours == 22
    assert view.average_efficiency == pytest.approx(2130 / 22)


def test_worker_and_job_rankings():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert [(w.name, w.total_amount) for w in view.top_workers] == [
        ("Alice", 1370),
        ("Bob", 560),
        ("Unknown", 200),
        ("Carol", 0),
    ]
    assert [(j.job, j.count) for j in view.job_distribution] == [("Cutting", 3), ("Packing", 1), ("Sewing", 1)]
    assert view.job_distribution_chart[0].value == 3


def test_daily_trend_is_a_fixed_window():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert len(view.daily_trends) == 7
    assert view.daily_trends[-1].count == 2
    assert view.daily_trends[-1].total("amount") == 1660
    assert view.daily_trends[-1].total("hours") == 16
    assert view.daily_trends[-2].total("amount") == 270
    assert sum(b.count for b in view.daily_trends) == 3


def test_entry_alerts_in_record_order():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert [(a.severity, a.message) for a in view.alerts] == [
        (AlertSeverity.WARNING, "Alice took 10h vs expected 8h on Cutting"),
        (AlertSeverity.WARNING, "Carol took 4h vs expected 3h on Sewing"),
        (AlertSeverity.ERROR, "Missing amount data for Carol - Sewing"),
    ]


def test_alerts_are_capped():
    broken = [JobEntryReport(entry_id=i, worker_name="W", job_name="J") for i in range(9)]

    view = build_job_entry_dashboard(broken, CONFIG)

    assert len(view.alerts) == 5


def test_today_vs_yesterday():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert view.comparisons.earnings.today == 1660
    assert view.comparisons.earnings.yesterday == 270
    assert view.comparisons.earnings.change == 1390
    assert (view.comparisons.jobs.today, view.comparisons.jobs.yesterday) == (2, 1)


def test_least_efficient_entries_first():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert [t.efficiency for t in view.time_efficiency] == [75, 80, 100, 133]
    assert view.time_efficiency[0].variance == 1


def test_worker_status_uses_latest_entry():
    workers = [Worker(worker_id=1, full_name="Alice"), Worker(worker_id=2, full_name="Dave")]

    view = build_job_entry_dashboard(ENTRIES, CONFIG, workers=workers)

    alice, dave = view.worker_status
    assert (alice.current_job, alice.status) == ("Cutting", "working")
    assert (dave.current_job, dave.last_activity, dave.status) == ("Available", "No recent activity", "available")


def test_shift_split_and_targets():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert [(s.shift, s.entries) for s in view.efficiency_analysis] == [("Morning", 4), ("Evening", 1)]
    assert view.targets.daily_earnings.actual == 1660
    assert view.targets.daily_earnings.percentage == pytest.approx(3.32)


def test_recent_activity_newest_first():
    view = build_job_entry_dashboard(ENTRIES, CONFIG)

    assert [a.hours for a in view.recent_activity] == [6, 10, 0, 4, 2]
    assert view.recent_activity[1].efficiency == 80
    assert view.recent_activity[-1].worker == "Unknown"
