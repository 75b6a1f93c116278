from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.numbers import optional_number
from ..core.enums import IncentiveType, JobMode
from ..core.exceptions import ValidationError
from ..records.fields import pick


@dataclass(frozen=True)
class JobDefinition:
    """Domain entity: a unit of work and its rate plan.

    Numeric fields are ``None`` when absent, which is not the same as zero:
    a missing rate makes the job unpayable in that mode, a missing target
    means the job has no expected output.
    """

    job_id: int
    job_name: str
    rate_per_hour: Optional[float] = None
    rate_per_item: Optional[float] = None
    expected_hours: Optional[float] = None
    expected_items_per_hour: Optional[float] = None
    incentive_bonus_rate: Optional[float] = None
    incentive_type: Optional[IncentiveType] = None
    penalty_rate: Optional[float] = None
    job_type_id: Optional[int] = None
    job_type_name: Optional[str] = None

    @property
    def mode(self) -> JobMode:
        """The single active rate plan; ambiguous plans are rejected."""
        hourly = self.rate_per_hour is not None
        item = self.rate_per_item is not None
        if hourly and item:
            raise ValidationError(f"Job '{self.job_name}' has both an hourly and an item rate")
        if not hourly and not item:
            raise ValidationError(f"Job '{self.job_name}' has no rate plan")
        return JobMode.HOURLY if hourly else JobMode.ITEM

    def rate_for(self, mode: JobMode) -> Optional[float]:
        return self.rate_per_hour if mode == JobMode.HOURLY else self.rate_per_item

    def target_for(self, mode: JobMode) -> Optional[float]:
        return self.expected_hours if mode == JobMode.HOURLY else self.expected_items_per_hour

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobDefinition":
        raw_type = pick(data, "incentiveType")
        try:
            incentive_type = IncentiveType(raw_type) if raw_type else None
        except ValueError:
            raise ValidationError(f"Unknown incentive type: {raw_type}")

        job_type_id = optional_number(pick(data, "jobTypeId"))
        return cls(
            job_id=int(optional_number(pick(data, "jobId")) or 0),
            job_name=str(pick(data, "jobName") or ""),
            rate_per_hour=optional_number(pick(data, "ratePerHour")),
            rate_per_item=optional_number(pick(data, "ratePerItem")),
            expected_hours=optional_number(pick(data, "expectedHours")),
            expected_items_per_hour=optional_number(pick(data, "expectedItemsPerHour")),
            incentive_bonus_rate=optional_number(pick(data, "incentiveBonusRate")),
            incentive_type=incentive_type,
            penalty_rate=optional_number(pick(data, "penaltyRate")),
            job_type_id=int(job_type_id) if job_type_id is not None else None,
            job_type_name=pick(data, "jobTypeName"),
        )
