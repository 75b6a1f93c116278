from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import IncentiveType
from ...jobs.model import JobDefinition
from ..model import CompensationResult, Measure


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for compensation)."""

    @abstractmethod
    def compute(self, job: JobDefinition, measure: Measure) -> CompensationResult:
        raise NotImplementedError

    @staticmethod
    def split(actual: float, target: Optional[float]) -> tuple[float, float, float]:
        """Return (productive, extra, shortfall) of ``actual`` against ``target``.

        A missing target is computed as a zero target.
        """
        expected = target or 0.0
        productive = min(actual, expected)
        extra = max(0.0, actual - expected)
        shortfall = max(0.0, expected - actual)
        return productive, extra, shortfall

    @staticmethod
    def incentive(job: JobDefinition, *, extra: float, base_amount: float) -> float:
        """Bonus for work beyond the target; zero without extra work or a policy."""
        rate = job.incentive_bonus_rate
        if extra <= 0 or not rate or job.incentive_type is None:
            return 0.0
        if job.incentive_type == IncentiveType.PER_UNIT:
            return extra * rate
        return base_amount * rate / 100
