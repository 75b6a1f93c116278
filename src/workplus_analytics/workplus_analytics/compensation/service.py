from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_datetime
from ..common.numbers import coerce_bool, optional_number
from ..common.validators import require_non_negative
from ..core.enums import EntryType, JobMode
from ..core.exceptions import ValidationError
from ..jobs.model import JobDefinition
from ..records.fields import pick
from .factory import CalculatorFactory
from .model import (
    CompensationResult,
    JobEntry,
    Measure,
    PerformanceObservation,
    TimeBased,
    UnitBased,
    actual_of,
    mode_of,
)

logger = logging.getLogger(__name__)

POST_LUNCH_SHIFTS = {"afternoon", "evening"}


def is_post_lunch_shift(shift: Optional[str]) -> bool:
    return (shift or "").strip().lower() in POST_LUNCH_SHIFTS


class CompensationService:
    def __init__(self, *, factory: Optional[CalculatorFactory] = None):
        self._factory = factory or CalculatorFactory()

    def compute(self, job: JobDefinition, observation: PerformanceObservation) -> CompensationResult:
        measure = observation.measure
        calculator = self._factory.for_measure(measure)
        self._validate(job, measure)

        result = calculator.compute(job, measure)
        logger.debug(
            "Computed %s compensation for job %s: total=%.2f",
            result.mode.value,
            job.job_id,
            result.total_amount,
        )
        return result

    def _validate(self, job: JobDefinition, measure: Measure) -> None:
        mode = mode_of(measure)
        require_non_negative(actual_of(measure), "Actual output")

        # job.mode raises when both or neither rate is set.
        if job.mode != mode:
            unit = "hour" if mode == JobMode.HOURLY else "item"
            raise ValidationError(f"Job '{job.job_name}' has no rate per {unit}")
        rate = job.rate_for(mode)
        require_non_negative(rate, "Rate")
        require_non_negative(job.target_for(mode), "Expected output")
        require_non_negative(job.incentive_bonus_rate, "Incentive bonus rate")
        require_non_negative(job.penalty_rate, "Penalty rate")

        if job.target_for(mode) is None:
            logger.info("Job %s has no %s target; computing against zero", job.job_id, mode.value.lower())

    @staticmethod
    def build_observation(
        *,
        job_id: int,
        hours_taken: Optional[float] = None,
        items_completed: Optional[float] = None,
        entry_type: EntryType = EntryType.INDIVIDUAL,
        worker_id: Optional[int] = None,
        group_id: Optional[int] = None,
        is_post_lunch: bool = False,
        remarks: Optional[str] = None,
        entry_date: Optional[datetime] = None,
    ) -> PerformanceObservation:
        """Build an observation from the mutually exclusive raw fields."""
        if hours_taken is not None and items_completed is not None:
            raise ValidationError("Provide either hours taken or items completed, not both")
        if hours_taken is None and items_completed is None:
            raise ValidationError("Provide hours taken or items completed")

        measure: Measure = TimeBased(hours_taken) if hours_taken is not None else UnitBased(items_completed)
        return PerformanceObservation(
            job_id=job_id,
            measure=measure,
            entry_type=entry_type,
            worker_id=worker_id,
            group_id=group_id,
            is_post_lunch=is_post_lunch,
            remarks=remarks,
            entry_date=entry_date,
        )

    def observation_for_job(
        self,
        job: JobDefinition,
        actual_output: Optional[float],
        *,
        entry_type: EntryType = EntryType.INDIVIDUAL,
        worker_id: Optional[int] = None,
        group_id: Optional[int] = None,
        shift: Optional[str] = None,
        remarks: Optional[str] = None,
        entry_date: Optional[datetime] = None,
    ) -> PerformanceObservation:
        """Entry-form path: the job's rate plan decides how the output is read.

        Item counts are rounded to whole items.
        """
        if entry_type == EntryType.INDIVIDUAL and not worker_id:
            raise ValidationError("Please select a worker")
        if entry_type == EntryType.GROUP and not group_id:
            raise ValidationError("Please select a group")
        if actual_output is None:
            raise ValidationError("Please enter the actual output")

        hourly = job.mode == JobMode.HOURLY
        return self.build_observation(
            job_id=job.job_id,
            hours_taken=actual_output if hourly else None,
            items_completed=None if hourly else float(round(actual_output)),
            entry_type=entry_type,
            worker_id=worker_id if entry_type == EntryType.INDIVIDUAL else None,
            group_id=group_id if entry_type == EntryType.GROUP else None,
            is_post_lunch=is_post_lunch_shift(shift),
            remarks=(remarks or "").strip() or None,
            entry_date=entry_date,
        )

    def observation_from_dict(self, data: Mapping[str, Any]) -> PerformanceObservation:
        raw_type = pick(data, "entryType") or EntryType.INDIVIDUAL.value
        try:
            entry_type = EntryType(raw_type)
        except ValueError:
            raise ValidationError(f"Unknown entry type: {raw_type}")

        worker_id = optional_number(pick(data, "workerId"))
        group_id = optional_number(pick(data, "groupId"))
        return self.build_observation(
            job_id=int(optional_number(pick(data, "jobId")) or 0),
            hours_taken=optional_number(pick(data, "hoursTaken")),
            items_completed=optional_number(pick(data, "itemsCompleted")),
            entry_type=entry_type,
            worker_id=int(worker_id) if worker_id is not None else None,
            group_id=int(group_id) if group_id is not None else None,
            is_post_lunch=coerce_bool(pick(data, "isPostLunch", False)),
            remarks=pick(data, "remarks"),
            entry_date=coerce_datetime(pick(data, "entryDate") or pick(data, "createdAt")),
        )

    def build_entry(self, job: JobDefinition, observation: PerformanceObservation) -> JobEntry:
        """Compute an observation into the record persisted by the job-entry API."""
        result = self.compute(job, observation)
        measure = observation.measure
        hourly = isinstance(measure, TimeBased)

        return JobEntry(
            job_id=job.job_id,
            entry_type=observation.entry_type,
            worker_id=observation.worker_id,
            group_id=observation.group_id,
            is_post_lunch=observation.is_post_lunch,
            hours_taken=measure.hours_taken if hourly else None,
            items_completed=None if hourly else measure.items_completed,
            rate_per_job=job.rate_for(result.mode) or 0.0,
            expected_hours=job.expected_hours,
            productive_hours=result.productive_hours,
            extra_hours=result.extra,
            underperformance_hours=result.underperformance_hours,
            incentive_amount=result.incentive_amount,
            total_amount=result.total_amount,
            remarks=observation.remarks,
            entry_date=observation.entry_date,
        )
