from src.workplus_analytics.workplus_analytics.compensation.calculator.item_calculator import ItemCompensationCalculator
from src.workplus_analytics.workplus_analytics.compensation.model import UnitBased
from src.workplus_analytics.workplus_analytics.core.enums import IncentiveType, JobMode
from src.workplus_analytics.workplus_analytics.jobs.model import JobDefinition


def _job(**overrides):
    fields = dict(
        job_id=2,
        job_name="Packing",
        rate_per_item=5.0,
        expected_items_per_hour=40.0,
        incentive_bonus_rate=2.0,
        incentive_type=IncentiveType.PER_UNIT,
        penalty_rate=10.0,
    )
    fields.update(overrides)
    return JobDefinition(**fields)


def test_extra_items_earn_incentive():
    result = ItemCompensationCalculator().compute(_job(), UnitBased(50))

    assert result.mode == JobMode.ITEM
    assert result.productive_items == 40
    assert result.extra_items == 10
    assert result.productive_hours is None
    assert result.base_amount == 250
    assert result.incentive_amount == 20
    assert result.total_amount == 270


def test_item_mode_has_no_penalty():
    result = ItemCompensationCalculator().compute(_job(), UnitBased(10))

    assert result.underperformance is None
    assert result.penalty_amount == 0
    assert result.total_amount == 50


def test_missing_item_target():
    result = ItemCompensationCalculator().compute(_job(expected_items_per_hour=None), UnitBased(3))

    assert result.has_target is False
    assert result.productive_items == 0
    assert result.extra_items == 3
