from __future__ import annotations

from datetime import date, datetime

from src.workplus_analytics.workplus_analytics.core.enums import OperationStatus, ReportPeriod
from src.workplus_analytics.workplus_analytics.core.exceptions import RecordSourceError
from src.workplus_analytics.workplus_analytics.dashboards.service import DashboardService
from src.workplus_analytics.workplus_analytics.records.model import (
    AttendanceRecord,
    JobEntryReport,
    LeaveRequest,
    Worker,
)

NOW = datetime(2026, 3, 10, 12, 0)


class FakeSource:
    def __init__(self, entries=(), attendance=(), requests=(), balances=(), workers=()):
        self.entries = list(entries)
        self.attendance = list(attendance)
        self.requests = list(requests)
        self.balances = list(balances)
        self.workers = list(workers)
        self.calls = []

    def get_job_entries(self):
        self.calls.append("job_entries")
        return self.entries

    def get_attendance(self):
        self.calls.append("attendance")
        return self.attendance

    def get_leave_requests(self):
        self.calls.append("leave_requests")
        return self.requests

    def get_leave_balances(self):
        self.calls.append("leave_balances")
        return self.balances

    def get_workers(self):
        self.calls.append("workers")
        return self.workers


class BrokenSource(FakeSource):
    def get_attendance(self):
        raise RecordSourceError("timeout")

    def get_job_entries(self):
        raise RecordSourceError("timeout")


def _service(source, **kwargs):
    return DashboardService(source, clock=lambda: NOW, **kwargs)


def test_config_uses_clock_and_settings():
    service = _service(FakeSource(), settings={"daily_window": 14})

    config = service.config()

    assert config.today == date(2026, 3, 10)
    assert config.daily_window == 14


def test_attendance_success():
    source = FakeSource(attendance=[AttendanceRecord(id=1, worker_id=1, attendance_date=NOW.date(), status="Present")])

    result = _service(source).attendance()

    assert result.is_success
    assert result.data.present_today == 1
    assert result.to_dict()["data"]["presentToday"] == 1


def test_settings_flow_into_dashboards():
    result = _service(FakeSource(), settings={"daily_window": 14}).attendance()

    assert len(result.data.daily_trends) == 14


def test_source_failure_becomes_failed_result():
    result = _service(BrokenSource()).attendance()

    assert result.status == OperationStatus.ERROR
    assert result.data is None
    assert result.message == "Failed to load attendance data. Please try again."


def test_failure_messages_per_dashboard():
    service = _service(BrokenSource())

    assert service.job_entries().message == "Failed to load dashboard data. Please try again."
    assert service.earnings().message == "Failed to load earnings data. Please try again."
    assert service.hr_worker_performance().message == "Failed to load performance data. Please try again."


def test_leave_dashboard_fetches_requests_and_balances():
    source = FakeSource(requests=[LeaveRequest(id=1, worker_id=1, status="Pending", applied_date=NOW.date())])

    result = _service(source).leave()

    assert result.is_success
    assert result.data.pending_requests == 1
    assert source.calls == ["leave_requests", "leave_balances"]


def test_period_and_worker_arguments_are_passed_through():
    source = FakeSource(
        entries=[
            JobEntryReport(entry_id=1, worker_name="Alice", hours_taken=2, total_amount=20, created_at=NOW),
            JobEntryReport(entry_id=2, worker_name="Bob", hours_taken=2, total_amount=20, created_at=datetime(2025, 1, 1)),
        ],
        workers=[Worker(worker_id=1, full_name="Alice")],
    )
    service = _service(source)

    assert service.earnings(period=ReportPeriod.WEEK).data.total_jobs == 1
    assert service.job_completion(period=ReportPeriod.ALL).data.total_jobs == 2
    assert service.worker_performance(worker_name="Bob").data.metrics.total_jobs == 1
    assert service.job_entries().data.worker_status[0].status == "working"


def test_repeated_calls_give_equal_results():
    source = FakeSource(attendance=[AttendanceRecord(id=1, worker_id=1, attendance_date=NOW.date(), status="Late")])
    service = _service(source)

    assert service.attendance().to_dict() == service.attendance().to_dict()
