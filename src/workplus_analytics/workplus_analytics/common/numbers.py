from __future__ import annotations

import math
from typing import Any, Optional


def optional_number(value: Any) -> Optional[float]:
    """Convert API values to float, keeping "absent" distinct from zero.

    ``None``, empty strings, booleans, NaN/inf and unparsable values all map
    to ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_number(value: Any, default: float = 0.0) -> float:
    number = optional_number(value)
    return default if number is None else number


def coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)
