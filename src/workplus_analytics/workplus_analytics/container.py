from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from .common.datetime_utils import now_local
from .compensation.factory import CalculatorFactory
from .compensation.service import CompensationService
from .dashboards.service import DashboardService
from .records.source import RecordSource
from .reports.service import JobEntryReportService


@dataclass(frozen=True)
class Container:
    """Application wiring.

    Record sources are per request (the request body carries the records),
    so the container holds factories for the services that read them.
    """

    calculator_factory: CalculatorFactory
    compensation_service: CompensationService
    clock: Callable[[], datetime]
    analytics_settings: Mapping[str, Any] = field(default_factory=dict)

    def dashboards(self, source: RecordSource) -> DashboardService:
        return DashboardService(source, clock=self.clock, settings=self.analytics_settings)

    def reports(self, source: RecordSource) -> JobEntryReportService:
        return JobEntryReportService(source, compensation=self.compensation_service)


def build_container(
    *,
    analytics_settings: Optional[Mapping[str, Any]] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    calculator_factory = CalculatorFactory()
    compensation_service = CompensationService(factory=calculator_factory)

    return Container(
        calculator_factory=calculator_factory,
        compensation_service=compensation_service,
        clock=clock,
        analytics_settings=dict(analytics_settings or {}),
    )
