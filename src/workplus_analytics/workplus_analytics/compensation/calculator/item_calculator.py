from __future__ import annotations

from ...core.enums import JobMode
from ...jobs.model import JobDefinition
from ..model import CompensationResult, Measure, actual_of
from .base import CompensationCalculator


class ItemCompensationCalculator(CompensationCalculator):
    """Unit mode: pay items completed, add incentive on extra items. No penalty."""

    def compute(self, job: JobDefinition, measure: Measure) -> CompensationResult:
        items = actual_of(measure)
        productive, extra, _ = self.split(items, job.expected_items_per_hour)

        base_amount = items * (job.rate_per_item or 0.0)
        incentive_amount = self.incentive(job, extra=extra, base_amount=base_amount)

        return CompensationResult(
            mode=JobMode.ITEM,
            has_target=job.expected_items_per_hour is not None,
            productive=productive,
            extra=extra,
            underperformance=None,
            base_amount=base_amount,
            incentive_amount=incentive_amount,
            penalty_amount=0.0,
            total_amount=max(0.0, base_amount + incentive_amount),
        )
