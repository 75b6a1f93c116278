import pytest

from src.workplus_analytics.workplus_analytics.compensation.calculator.hourly_calculator import (
    HourlyCompensationCalculator,
)
from src.workplus_analytics.workplus_analytics.compensation.calculator.item_calculator import ItemCompensationCalculator
from src.workplus_analytics.workplus_analytics.compensation.factory import CalculatorFactory
from src.workplus_analytics.workplus_analytics.compensation.model import TimeBased, UnitBased
from src.workplus_analytics.workplus_analytics.core.exceptions import ValidationError


def test_factory_picks_hourly_for_time_based():
    assert isinstance(CalculatorFactory().for_measure(TimeBased(1)), HourlyCompensationCalculator)


def test_factory_picks_item_for_unit_based():
    assert isinstance(CalculatorFactory().for_measure(UnitBased(1)), ItemCompensationCalculator)


def test_factory_rejects_unknown_measure():
    with pytest.raises(ValidationError):
        CalculatorFactory().for_measure({"hoursTaken": 3})
