from __future__ import annotations

from ...core.enums import JobMode
from ...jobs.model import JobDefinition
from ..model import CompensationResult, Measure, actual_of
from .base import CompensationCalculator


class HourlyCompensationCalculator(CompensationCalculator):
    """Time mode: pay hours taken, add incentive on extra hours, deduct a penalty on shortfall."""

    def compute(self, job: JobDefinition, measure: Measure) -> CompensationResult:
        hours_taken = actual_of(measure)
        productive, extra, shortfall = self.split(hours_taken, job.expected_hours)

        base_amount = hours_taken * (job.rate_per_hour or 0.0)
        incentive_amount = self.incentive(job, extra=extra, base_amount=base_amount)
        penalty_amount = shortfall * (job.penalty_rate or 0.0)
        total = max(0.0, base_amount + incentive_amount - penalty_amount)

        return CompensationResult(
            mode=JobMode.HOURLY,
            has_target=job.expected_hours is not None,
            productive=productive,
            extra=extra,
            underperformance=shortfall,
            base_amount=base_amount,
            incentive_amount=incentive_amount,
            penalty_amount=penalty_amount,
            total_amount=total,
        )
