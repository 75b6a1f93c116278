from __future__ import annotations

import math
from typing import Optional


def safe_ratio(numerator: Optional[float], denominator: Optional[float]) -> float:
    """``numerator / denominator``, defined as 0 when the denominator is 0 or absent."""
    if not denominator or numerator is None:
        return 0.0
    value = numerator / denominator
    return value if math.isfinite(value) else 0.0


def safe_rate(numerator: Optional[float], denominator: Optional[float]) -> float:
    """Percentage ``numerator / denominator * 100``; 0 for a zero denominator."""
    return safe_ratio(numerator, denominator) * 100


def clamp(value: float, low: float = 0.0, high: Optional[float] = None) -> float:
    if high is not None and value > high:
        return high
    return max(low, value)
