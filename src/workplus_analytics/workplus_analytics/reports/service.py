from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from ..compensation.service import CompensationService
from ..core.exceptions import ValidationError
from ..jobs.model import JobDefinition
from ..records.model import JobEntryReport
from ..records.source import RecordSource

logger = logging.getLogger(__name__)

NOT_APPLICABLE = "N/A"

REPORT_COLUMNS = (
    "entry_id",
    "date",
    "entry_type",
    "worker_or_group",
    "job_name",
    "expected_hours",
    "hours_taken",
    "items_completed",
    "rate",
    "productive_hours",
    "extra_hours",
    "underperformance_hours",
    "incentive_amount",
    "total_amount",
    "shift",
    "remarks",
)

# Stored amounts within this many currency units of the recomputed value match.
AMOUNT_TOLERANCE = 0.01


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


@dataclass(frozen=True)
class AmountMismatch:
    entry_id: int
    job_name: Optional[str]
    stored_amount: Optional[float]
    computed_amount: float


def _fixed(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else NOT_APPLICABLE


class JobEntryReportService:
    def __init__(self, source: RecordSource, *, compensation: Optional[CompensationService] = None):
        self._source = source
        self._compensation = compensation or CompensationService()

    def build_job_entry_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        worker_name: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
    ) -> ReportData:
        """Display rows plus a per-worker earnings summary.

        Hour-based cells read "N/A" on item entries and vice versa. When
        ``columns`` is given, rows keep only those columns, in that order.
        """
        if columns is not None:
            unknown = [c for c in columns if c not in REPORT_COLUMNS]
            if unknown:
                raise ValidationError(f"Unknown report columns: {', '.join(unknown)}")

        entries = [e for e in self._source.get_job_entries() if self._matches(e, start, end, worker_name)]

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for e in entries:
            hourly = e.hours_taken is not None
            item_based = e.items_completed is not None

            if hourly:
                rate = f"{e.rate_per_job or 0:.2f}/hr"
            elif item_based:
                rate = f"{e.rate_per_job or 0:.2f}/item"
            else:
                rate = NOT_APPLICABLE

            row = {
                "entry_id": e.entry_id,
                "date": e.created_at.strftime("%m/%d/%Y") if e.created_at else NOT_APPLICABLE,
                "entry_type": e.entry_type or NOT_APPLICABLE,
                "worker_or_group": e.worker_name or e.group_name or NOT_APPLICABLE,
                "job_name": e.job_name or NOT_APPLICABLE,
                "expected_hours": _fixed(e.expected_hours),
                "hours_taken": _fixed(e.hours_taken) if hourly else NOT_APPLICABLE,
                "items_completed": f"{e.items_completed:g}" if item_based else NOT_APPLICABLE,
                "rate": rate,
                "productive_hours": _fixed(e.productive_hours) if hourly else NOT_APPLICABLE,
                "extra_hours": _fixed(e.extra_hours) if hourly or item_based else NOT_APPLICABLE,
                "underperformance_hours": _fixed(e.underperformance_hours) if hourly else NOT_APPLICABLE,
                "incentive_amount": f"{e.incentive_amount or 0:.2f}",
                "total_amount": f"{e.amount:.2f}",
                "shift": "Afternoon/Evening" if e.is_post_lunch else "Morning",
                "remarks": e.remarks or NOT_APPLICABLE,
            }
            out_rows.append({c: row[c] for c in columns} if columns is not None else row)

            name = e.worker_name or e.group_name or NOT_APPLICABLE
            s = summary_map.get(name)
            if not s:
                s = {"worker_or_group": name, "total_jobs": 0, "total_hours": 0.0, "total_amount": 0.0}
                summary_map[name] = s
            s["total_jobs"] += 1
            s["total_hours"] += e.hours
            s["total_amount"] += e.amount

        summary = sorted(summary_map.values(), key=lambda x: x["total_amount"], reverse=True)
        logger.info("Built job entry report", extra={"record_count": len(out_rows)})
        return ReportData(rows=out_rows, summary=summary)

    @staticmethod
    def _matches(entry: JobEntryReport, start: Optional[date], end: Optional[date], worker_name: Optional[str]) -> bool:
        if worker_name and entry.worker_name != worker_name:
            return False
        if start is None and end is None:
            return True
        if entry.created_at is None:
            return False
        day = entry.created_at.date()
        return (start is None or day >= start) and (end is None or day <= end)

    def reconcile_amounts(self, jobs_by_name: Mapping[str, JobDefinition]) -> list[AmountMismatch]:
        """Recompute every stored entry from its job definition.

        Returns the entries whose stored total differs from the recomputed one.
        Entries with an unknown job or unusable raw fields are skipped.
        """
        mismatches: list[AmountMismatch] = []
        for e in self._source.get_job_entries():
            job = jobs_by_name.get(e.job_name or "")
            if job is None:
                logger.warning("No job definition for entry %s (%s)", e.entry_id, e.job_name)
                continue
            try:
                observation = self._compensation.build_observation(
                    job_id=job.job_id,
                    hours_taken=e.hours_taken,
                    items_completed=e.items_completed,
                )
                computed = self._compensation.compute(job, observation).total_amount
            except ValidationError as exc:
                logger.warning("Cannot recompute entry %s: %s", e.entry_id, exc)
                continue

            if e.total_amount is None or abs(e.total_amount - computed) > AMOUNT_TOLERANCE:
                mismatches.append(
                    AmountMismatch(
                        entry_id=e.entry_id,
                        job_name=e.job_name,
                        stored_amount=e.total_amount,
                        computed_amount=computed,
                    )
                )
        return mismatches
