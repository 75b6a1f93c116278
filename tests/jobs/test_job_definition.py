from __future__ import annotations

import pytest

from src.workplus_analytics.workplus_analytics.core.enums import IncentiveType, JobMode
from src.workplus_analytics.workplus_analytics.core.exceptions import ValidationError
from src.workplus_analytics.workplus_analytics.jobs.model import JobDefinition


def test_mode_follows_populated_rate():
    assert JobDefinition(job_id=1, job_name="A", rate_per_hour=10).mode == JobMode.HOURLY
    assert JobDefinition(job_id=2, job_name="B", rate_per_item=0).mode == JobMode.ITEM


def test_both_rates_is_ambiguous():
    job = JobDefinition(job_id=1, job_name="A", rate_per_hour=10, rate_per_item=2)

    with pytest.raises(ValidationError, match="both"):
        job.mode


def test_no_rate_plan():
    with pytest.raises(ValidationError, match="no rate plan"):
        JobDefinition(job_id=1, job_name="A").mode


def test_from_dict_keeps_absent_distinct_from_zero():
    job = JobDefinition.from_dict(
        {
            "JobId": 7,
            "JobName": "Packing",
            "RatePerItem": "2.5",
            "ExpectedItemsPerHour": 0,
            "IncentiveType": "Percentage",
        }
    )

    assert job.job_id == 7
    assert job.rate_per_item == 2.5
    assert job.rate_per_hour is None
    assert job.expected_items_per_hour == 0
    assert job.penalty_rate is None
    assert job.incentive_type == IncentiveType.PERCENTAGE


def test_from_dict_rejects_unknown_incentive_type():
    with pytest.raises(ValidationError):
        JobDefinition.from_dict({"jobId": 1, "jobName": "A", "incentiveType": "Bonus"})
