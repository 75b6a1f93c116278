from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError
from .calculator.base import CompensationCalculator
from .calculator.hourly_calculator import HourlyCompensationCalculator
from .calculator.item_calculator import ItemCompensationCalculator
from .model import Measure, TimeBased, UnitBased


@dataclass
class CalculatorFactory:
    """Factory Pattern: choose the calculator matching the observation's measure."""

    def for_measure(self, measure: Measure) -> CompensationCalculator:
        if isinstance(measure, TimeBased):
            return HourlyCompensationCalculator()
        if isinstance(measure, UnitBased):
            return ItemCompensationCalculator()
        raise ValidationError("Observation must record either hours taken or items completed")
