from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..analytics.model import AggregationConfig
from ..common.datetime_utils import now_local
from ..core.enums import ReportPeriod
from ..core.exceptions import RecordSourceError
from ..core.result import OperationResult
from ..records.source import RecordSource
from .attendance import AttendanceDashboard, build_attendance_dashboard
from .completion import JobCompletionReport, build_job_completion_report
from .earnings import EarningsReport, build_earnings_report
from .job_entries import JobEntryDashboard, build_job_entry_dashboard
from .leave import LeaveAnalytics, LeaveDashboard, build_leave_analytics, build_leave_dashboard
from .worker_performance import (
    HRWorkerPerformance,
    WorkerPerformanceReport,
    build_hr_worker_performance,
    build_worker_performance,
)

logger = logging.getLogger(__name__)

V = TypeVar("V")


class DashboardService:
    """Fetches records and builds dashboard view-models.

    Record-source failures never escape: they become a failed
    ``OperationResult`` carrying the banner message for that dashboard.
    """

    def __init__(
        self,
        source: RecordSource,
        *,
        clock: Callable[[], datetime] = now_local,
        settings: Optional[Mapping[str, Any]] = None,
    ):
        self._source = source
        self._clock = clock
        self._settings = dict(settings or {})

    def config(self) -> AggregationConfig:
        return AggregationConfig(today=self._clock().date(), **self._settings)

    def _run(self, label: str, build: Callable[[AggregationConfig], V]) -> OperationResult[V]:
        try:
            view = build(self.config())
        except RecordSourceError:
            logger.exception("Failed to fetch records for %s dashboard", label, extra={"dashboard": label})
            return OperationResult.failed(f"Failed to load {label} data. Please try again.")
        logger.info("Built %s dashboard", label, extra={"dashboard": label})
        return OperationResult.ok(view)

    def attendance(self) -> OperationResult[AttendanceDashboard]:
        return self._run("attendance", lambda cfg: build_attendance_dashboard(self._source.get_attendance(), cfg))

    def leave(self) -> OperationResult[LeaveDashboard]:
        return self._run(
            "leave",
            lambda cfg: build_leave_dashboard(self._source.get_leave_requests(), self._source.get_leave_balances(), cfg),
        )

    def leave_analytics(self, *, year: Optional[int] = None) -> OperationResult[LeaveAnalytics]:
        return self._run(
            "leave analytics",
            lambda cfg: build_leave_analytics(self._source.get_leave_requests(), cfg, year=year),
        )

    def job_entries(self) -> OperationResult[JobEntryDashboard]:
        return self._run(
            "dashboard",
            lambda cfg: build_job_entry_dashboard(self._source.get_job_entries(), cfg, workers=self._source.get_workers()),
        )

    def earnings(self, *, period: ReportPeriod = ReportPeriod.ALL) -> OperationResult[EarningsReport]:
        return self._run(
            "earnings",
            lambda cfg: build_earnings_report(self._source.get_job_entries(), cfg, period=period),
        )

    def job_completion(self, *, period: ReportPeriod = ReportPeriod.ALL) -> OperationResult[JobCompletionReport]:
        return self._run(
            "job completion",
            lambda cfg: build_job_completion_report(self._source.get_job_entries(), cfg, period=period),
        )

    def worker_performance(self, *, worker_name: Optional[str] = None) -> OperationResult[WorkerPerformanceReport]:
        return self._run(
            "worker performance",
            lambda cfg: build_worker_performance(self._source.get_job_entries(), cfg, worker_name=worker_name),
        )

    def hr_worker_performance(self, *, worker_id: Optional[int] = None) -> OperationResult[HRWorkerPerformance]:
        return self._run(
            "performance",
            lambda cfg: build_hr_worker_performance(
                self._source.get_attendance(),
                self._source.get_leave_requests(),
                self._source.get_leave_balances(),
                cfg,
                workers=self._source.get_workers(),
                worker_id=worker_id,
            ),
        )
